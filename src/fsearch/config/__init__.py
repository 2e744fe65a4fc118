"""Configuration management module."""

from .defaults import get_default_config, load_defaults
from .loader import load, load_with_fallback, read_config, release, save, write_config
from .manager import ConfigManager
from .paths import config_directory, config_file_path, ensure_config_directory

__all__ = [
    "ConfigManager",
    "config_directory",
    "config_file_path",
    "ensure_config_directory",
    "get_default_config",
    "load",
    "load_defaults",
    "load_with_fallback",
    "read_config",
    "release",
    "save",
    "write_config",
]
