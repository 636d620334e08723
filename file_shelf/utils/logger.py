"""
Logging Setup

All package loggers hang off the ``file_shelf`` logger, which writes to
stdout and, when enabled, to a size-rotated log file. Either destination
can emit JSON lines instead of plain text.

Author: File Shelf Project
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional
from pythonjsonlogger import jsonlogger

ROOT_LOGGER_NAME = "file_shelf"

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Plain and JSON field layouts; the file variants add the call site
CONSOLE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'
FILE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
CONSOLE_JSON_FIELDS = '%(asctime)s %(name)s %(levelname)s %(message)s'
FILE_JSON_FIELDS = '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(lineno)d %(message)s'


class ColoredFormatter(logging.Formatter):
    """Wraps the level name in an ANSI color for terminals."""
    
    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'
    
    def format(self, record):
        # copy, other handlers share the record
        record = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _build_formatter(json_format: bool, for_file: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(FILE_JSON_FIELDS if for_file else CONSOLE_JSON_FIELDS)
    if for_file:
        return logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
    return ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT)


def _file_handler(path: Path, max_bytes: int, backups: int) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(str(path), maxBytes=max_bytes, backupCount=backups, encoding='utf-8')


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_file_path: str = "~/.local/state/file-shelf/file_shelf.log",
    log_rotation_size: int = 1048576,
    log_retention_count: int = 3,
    json_format: bool = False
) -> logging.Logger:
    """
    (Re)configure the ``file_shelf`` logger.
    
    Existing handlers are dropped first, so calling this again after a
    config reload does not duplicate output. Records do not propagate to
    the root logger.
    
    Args:
        log_level: Level name, case-insensitive
        log_to_file: Also write to a rotating file
        log_file_path: Log file location, ``~`` allowed
        log_rotation_size: Bytes per file before rotating
        log_retention_count: Rotated files kept
        json_format: Emit JSON lines on every handler
    
    Returns:
        The configured logger
    """
    level_name = str(log_level).upper()
    level = getattr(logging, level_name)
    
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False
    
    handlers = [(logging.StreamHandler(sys.stdout), False)]
    log_path: Optional[Path] = None
    if log_to_file:
        log_path = Path(log_file_path).expanduser()
        handlers.append((_file_handler(log_path, log_rotation_size, log_retention_count), True))
    
    for handler, for_file in handlers:
        handler.setLevel(level)
        handler.setFormatter(_build_formatter(json_format, for_file))
        logger.addHandler(handler)
    
    logger.info(f"Log level set to {level_name}")
    if log_path is not None:
        logger.info(f"Writing log file to {log_path}")
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, nested under ``file_shelf``."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
