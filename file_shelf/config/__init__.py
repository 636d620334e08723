"""
File Shelf Configuration Module

YAML configuration with environment variable overrides and validation.

Author: File Shelf Project
License: MIT
"""

from .schema import Config, AppConfig, ShelfConfig, LogLevel
from .config_loader import ConfigLoader, load_config

__version__ = "0.1.0"
__all__ = ['Config', 'AppConfig', 'ShelfConfig', 'LogLevel', 'ConfigLoader', 'load_config']
