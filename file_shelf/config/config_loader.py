"""
Configuration Loader

Loads configuration from a YAML file, merges environment variable
overrides and saves edited configuration back to disk.

Author: File Shelf Project
License: MIT
"""

import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from .schema import Config

DEFAULT_CONFIG_PATH = "~/.config/file-shelf/config.yaml"


class ConfigLoader:
    """
    Configuration loader and manager.
    
    Loads configuration from YAML, merges environment variables and
    validates the result.
    """
    
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration loader.
        
        Args:
            config_path: Path to the configuration file. If None, uses
                ``CONFIG_PATH`` or the per-user default location.
        """
        # Load environment variables from .env if present
        load_dotenv()
        
        self.config_path = str(Path(
            config_path or os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)
        ).expanduser())
        self._config: Optional[Config] = None
    
    def load(self) -> Config:
        """
        Load and validate configuration.
        
        Returns:
            Validated Config object
            
        Raises:
            ValueError: If YAML parsing or validation fails
        """
        config_data = self._load_yaml()
        config_data = self._merge_env_vars(config_data)
        
        self._config = Config(**config_data)
        return self._config
    
    def _load_yaml(self) -> Dict[str, Any]:
        """
        Load YAML configuration file.
        
        Returns:
            Dictionary with configuration data
        """
        config_file = Path(self.config_path)
        
        if not config_file.exists():
            return self._create_default_config()
        
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML config: {e}")
        
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_file}")
        return data
    
    def _create_default_config(self) -> Dict[str, Any]:
        """
        Create default configuration structure.
        
        Returns:
            Default configuration dictionary
        """
        return {
            "app": {
                "host": "127.0.0.1",
                "port": 8765,
                "log_level": "INFO"
            },
            "shelf": {
                "keep_shelf_after_completion": False,
                "default_conflict_strategy": "skip",
                "rename_search_limit": 9999
            }
        }
    
    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge environment variables into configuration.
        
        Environment variables override config file values.
        Naming convention: SECTION_KEY (e.g., APP_PORT, SHELF_STORAGE_PATH)
        
        Args:
            config_data: Configuration dictionary from file
            
        Returns:
            Merged configuration dictionary
        """
        # App settings
        if os.getenv("APP_HOST"):
            config_data.setdefault("app", {})["host"] = os.getenv("APP_HOST")
        if os.getenv("APP_PORT"):
            config_data.setdefault("app", {})["port"] = int(os.getenv("APP_PORT"))
        if os.getenv("APP_LOG_LEVEL"):
            config_data.setdefault("app", {})["log_level"] = os.getenv("APP_LOG_LEVEL")
        
        # Shelf settings
        if os.getenv("SHELF_STORAGE_PATH"):
            config_data.setdefault("shelf", {})["storage_path"] = os.getenv("SHELF_STORAGE_PATH")
        if os.getenv("SHELF_KEEP_AFTER_COMPLETION"):
            config_data.setdefault("shelf", {})["keep_shelf_after_completion"] = (
                os.getenv("SHELF_KEEP_AFTER_COMPLETION").lower() == "true"
            )
        if os.getenv("SHELF_CONFLICT_STRATEGY"):
            config_data.setdefault("shelf", {})["default_conflict_strategy"] = (
                os.getenv("SHELF_CONFLICT_STRATEGY").lower()
            )
        
        return config_data
    
    def save(self, config: Config, path: Optional[str] = None) -> None:
        """
        Save configuration to YAML file.
        
        Args:
            config: Config object to save
            path: Path to save to (uses default if None)
        """
        save_path = Path(path or self.config_path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        
        config_dict = config.model_dump(mode="json")
        
        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)
    
    def reload(self) -> Config:
        """Reload configuration from file."""
        return self.load()
    
    @property
    def config(self) -> Optional[Config]:
        """Get the current configuration object."""
        return self._config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Convenience function to load configuration.
    
    Args:
        config_path: Optional path to config file
        
    Returns:
        Loaded and validated Config object
    """
    loader = ConfigLoader(config_path)
    return loader.load()
