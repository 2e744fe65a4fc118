"""Configuration file locations."""

import logging
from pathlib import Path
from typing import Optional, Union

from platformdirs import user_config_path

logger = logging.getLogger(__name__)

CONFIG_FOLDER_NAME = "fsearch"
CONFIG_FILE_NAME = "fsearch.conf"
CONFIG_DIR_MODE = 0o700


def config_directory() -> Path:
    """Return the per-user configuration directory of the application."""
    return user_config_path() / CONFIG_FOLDER_NAME


def config_file_path(config_dir: Optional[Union[str, Path]] = None) -> Path:
    """Return the path of the settings file.

    Args:
        config_dir: Directory holding the file, defaults to :func:`config_directory`

    Returns:
        Settings file path
    """
    directory = Path(config_dir) if config_dir is not None else config_directory()
    return directory / CONFIG_FILE_NAME


def ensure_config_directory(config_dir: Optional[Union[str, Path]] = None) -> bool:
    """Create the configuration directory and its parents if missing.

    Newly created directories are only accessible by the owner.

    Args:
        config_dir: Directory to create, defaults to :func:`config_directory`

    Returns:
        True if the directory exists afterwards
    """
    directory = Path(config_dir) if config_dir is not None else config_directory()
    try:
        directory.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create config directory {directory}: {e}")
        return False

    logger.debug(f"Config directory ready: {directory}")
    return True
