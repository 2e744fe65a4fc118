"""Configuration manager."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models.config import FsearchConfig
from .defaults import get_default_config
from .loader import load_with_fallback, save
from .paths import config_directory, config_file_path, ensure_config_directory

logger = logging.getLogger(__name__)


class ConfigManager:
    """Owns one configuration record and its settings file.

    The record held by the manager is released when it is replaced or
    when the manager is closed, so callers never release it themselves.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize config manager.

        Args:
            config_dir: Optional configuration directory, defaults to the per-user location
        """
        self.config_dir = Path(config_dir) if config_dir is not None else None
        self._config: Optional[FsearchConfig] = None
        self._loaded_from_file = False
        self._closed = False

    def __enter__(self) -> "ConfigManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def directory(self) -> Path:
        """Configuration directory in use."""
        return self.config_dir if self.config_dir is not None else config_directory()

    @property
    def config_path(self) -> Path:
        """Settings file in use."""
        return config_file_path(self.directory)

    @property
    def loaded_from_file(self) -> bool:
        """Whether the current record was read from the settings file."""
        return self._loaded_from_file

    @property
    def config(self) -> FsearchConfig:
        """Get current configuration, loading it on first access."""
        self._check_open()
        if self._config is None:
            self.load()
        return self._config

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("Configuration manager is closed")

    def _replace(self, config: FsearchConfig) -> None:
        if self._config is not None and not self._config.released:
            self._config.release()
        self._config = config

    def load(self) -> bool:
        """Load the settings file, falling back to defaults.

        Returns:
            True if the settings file was used
        """
        self._check_open()
        config, loaded = load_with_fallback(self.config_path)
        self._replace(config)
        self._loaded_from_file = loaded
        return loaded

    def save(self) -> bool:
        """Save current configuration, creating the directory if needed.

        Returns:
            True if the settings file was written

        Raises:
            ValueError: If no configuration is loaded
        """
        self._check_open()
        if self._config is None:
            raise ValueError("No configuration loaded")

        if not ensure_config_directory(self.directory):
            return False
        return save(self._config, self.config_path)

    def update(self, **kwargs: Any) -> None:
        """Update configuration fields.

        Args:
            **kwargs: Field values to set

        Raises:
            ValueError: If a field is unknown or a value is invalid
        """
        unknown = set(kwargs) - set(FsearchConfig.model_fields)
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")

        # Validate everything before touching the current record
        updated = FsearchConfig(**{**self.config.model_dump(), **kwargs})
        self._replace(updated)

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._check_open()
        self._replace(get_default_config())
        self._loaded_from_file = False

    def add_location(self, location: str) -> bool:
        """Append a location unless it is already present.

        Returns:
            True if the location was added
        """
        locations = self.config.locations
        if location in locations:
            logger.debug(f"Location already configured: {location}")
            return False
        locations.append(location)
        return True

    def remove_location(self, location: str) -> bool:
        """Remove a location.

        Returns:
            True if the location was present
        """
        locations = self.config.locations
        if location not in locations:
            return False
        locations.remove(location)
        return True

    def get_config_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary."""
        return self.config.model_dump()

    def close(self) -> None:
        """Release the owned record; the manager cannot be used afterwards."""
        if self._closed:
            return
        if self._config is not None and not self._config.released:
            self._config.release()
        self._config = None
        self._closed = True
