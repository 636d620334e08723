"""
Configuration Schema and Models

Pydantic models for the configuration file, providing validation and
default values for every option.

Author: File Shelf Project
License: MIT
"""

from enum import Enum
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.models import ConflictStrategy


DEFAULT_STORAGE_PATH = str(Path("~/.local/share/file-shelf/shelf.json").expanduser())
DEFAULT_LOG_PATH = str(Path("~/.local/state/file-shelf/file_shelf.log").expanduser())


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AppConfig(BaseModel):
    """Web API and logging settings."""
    
    host: str = Field(
        default="127.0.0.1",
        description="Web API host address"
    )
    port: int = Field(
        default=8765,
        description="Web API port"
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application logging level"
    )
    log_to_file: bool = Field(
        default=False,
        description="Enable logging to file"
    )
    log_file_path: str = Field(
        default=DEFAULT_LOG_PATH,
        description="Log file location"
    )
    log_rotation_size: int = Field(
        default=1048576,  # 1MB
        description="Log file size before rotation (bytes)"
    )
    log_retention_count: int = Field(
        default=3,
        description="Number of rotated log files to keep"
    )
    json_logs: bool = Field(
        default=False,
        description="Emit logs as JSON"
    )
    
    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class ShelfConfig(BaseModel):
    """Shelf storage and transfer behavior."""
    
    storage_path: str = Field(
        default=DEFAULT_STORAGE_PATH,
        description="JSON file holding the staged items"
    )
    keep_shelf_after_completion: bool = Field(
        default=False,
        description="Keep items on the shelf after a fully successful copy or move"
    )
    default_conflict_strategy: ConflictStrategy = Field(
        default=ConflictStrategy.SKIP,
        description="Conflict strategy used when a request does not name one"
    )
    rename_search_limit: int = Field(
        default=9999,
        ge=1,
        description="Highest counter tried when auto-renaming on conflict"
    )
    
    @field_validator("storage_path")
    @classmethod
    def validate_storage_path(cls, v):
        """Ensure storage path is absolute after ~ expansion."""
        expanded = Path(v).expanduser()
        if not expanded.is_absolute():
            raise ValueError(f"Shelf storage_path must be absolute: {v}")
        return str(expanded)


class Config(BaseModel):
    """
    Root configuration model for File Shelf.
    
    Loaded from config.yaml and overridden by environment variables.
    """
    
    model_config = ConfigDict(validate_assignment=True)
    
    app: AppConfig = Field(default_factory=AppConfig)
    shelf: ShelfConfig = Field(default_factory=ShelfConfig)
