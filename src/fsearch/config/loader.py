"""Configuration loading and saving."""

import logging
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union

from ..errors import (
    ConfigError,
    ConfigLoadError,
    ConfigNotFoundError,
    ConfigSaveError,
    KeyFileError,
    KeyFileErrorCode,
)
from ..models.config import INTERFACE_FIELDS, SEARCH_FIELDS, UINT32_MAX, FsearchConfig
from .defaults import get_default_config
from .keyfile import KeyFile
from .paths import config_file_path

logger = logging.getLogger(__name__)

GROUP_INTERFACE = "Interface"
GROUP_SEARCH = "Search"
GROUP_DATABASE = "Database"

LOCATION_KEY_PREFIX = "location_"

_INTEGER_FIELDS = frozenset({"num_results"})

PathLike = Union[str, Path]


class FieldResult(NamedTuple):
    """Outcome of reading a single key."""

    value: Any
    used_default: bool


def _report_lookup_error(error: KeyFileError) -> None:
    """Log a per-field lookup failure according to its category."""
    if error.code is KeyFileErrorCode.INVALID_VALUE:
        logger.warning(f"load_config: invalid value: {error.message}")
    elif error.is_missing:
        # New config or new field, the default is expected
        logger.debug(error.message)
    else:
        logger.error(f"load_config: unknown error: {error.message}")


def read_boolean(key_file: KeyFile, group: str, key: str, default: bool) -> FieldResult:
    """Read a boolean key, falling back to ``default``."""
    try:
        return FieldResult(key_file.get_boolean(group, key), False)
    except KeyFileError as e:
        _report_lookup_error(e)
        return FieldResult(default, True)


def read_integer(key_file: KeyFile, group: str, key: str, default: int) -> FieldResult:
    """Read an unsigned 32-bit integer key, falling back to ``default``."""
    try:
        value = key_file.get_integer(group, key)
    except KeyFileError as e:
        _report_lookup_error(e)
        return FieldResult(default, True)

    if not 0 <= value <= UINT32_MAX:
        _report_lookup_error(KeyFileError(
            KeyFileErrorCode.INVALID_VALUE,
            f"Key '{key}' in group '{group}' has value '{value}' which is out of range",
        ))
        return FieldResult(default, True)
    return FieldResult(value, False)


def read_string(key_file: KeyFile, group: str, key: str, default: Optional[str] = None) -> FieldResult:
    """Read a string key, falling back to ``default``."""
    try:
        return FieldResult(key_file.get_string(group, key), False)
    except KeyFileError as e:
        _report_lookup_error(e)
        return FieldResult(default, True)


def read_locations(key_file: KeyFile) -> List[str]:
    """Read ``location_1``, ``location_2``, ... until the first missing or empty entry."""
    locations = []
    pos = 1
    while True:
        result = read_string(key_file, GROUP_DATABASE, f"{LOCATION_KEY_PREFIX}{pos}")
        if result.used_default or not result.value:
            break
        locations.append(result.value)
        pos += 1
    return locations


def _field_default(name: str) -> Any:
    return FsearchConfig.model_fields[name].get_default(call_default_factory=True)


def config_from_key_file(key_file: KeyFile) -> Tuple[FsearchConfig, List[str]]:
    """Build a configuration record from a parsed key file.

    Every scalar field is read independently and falls back to its
    per-field default when missing or invalid.

    Args:
        key_file: Parsed key file

    Returns:
        Tuple of the record and the names of fields that used their default
    """
    values: Dict[str, Any] = {}
    defaulted: List[str] = []

    groups = [(GROUP_INTERFACE, name) for name in INTERFACE_FIELDS]
    groups += [(GROUP_SEARCH, name) for name in SEARCH_FIELDS]

    for group, name in groups:
        reader = read_integer if name in _INTEGER_FIELDS else read_boolean
        result = reader(key_file, group, name, _field_default(name))
        values[name] = result.value
        if result.used_default:
            defaulted.append(name)

    values["locations"] = read_locations(key_file)

    return FsearchConfig(**values), defaulted


def config_to_key_file(config: FsearchConfig) -> KeyFile:
    """Serialize a configuration record into a key file.

    Locations are numbered contiguously from ``location_1``.
    """
    key_file = KeyFile()

    for name in INTERFACE_FIELDS:
        key_file.set_boolean(GROUP_INTERFACE, name, getattr(config, name))

    for name in SEARCH_FIELDS:
        if name in _INTEGER_FIELDS:
            key_file.set_integer(GROUP_SEARCH, name, getattr(config, name))
        else:
            key_file.set_boolean(GROUP_SEARCH, name, getattr(config, name))

    for pos, location in enumerate(config.locations, start=1):
        key_file.set_string(GROUP_DATABASE, f"{LOCATION_KEY_PREFIX}{pos}", location)

    return key_file


def read_config(config_path: PathLike) -> Tuple[FsearchConfig, List[str]]:
    """Read a configuration file.

    Args:
        config_path: Path to the settings file

    Returns:
        Tuple of the record and the names of fields that used their default

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigLoadError: If the file cannot be read or is malformed
    """
    config_path = Path(config_path)
    key_file = KeyFile()

    try:
        key_file.load_from_file(config_path)
    except FileNotFoundError as e:
        raise ConfigNotFoundError(f"Configuration file not found: {config_path}") from e
    except (OSError, KeyFileError) as e:
        raise ConfigLoadError(f"Failed to read configuration {config_path}: {e}") from e

    return config_from_key_file(key_file)


def write_config(config: FsearchConfig, config_path: PathLike) -> None:
    """Write a configuration record to a file.

    The content is fully serialized before the file is opened. The
    directory must already exist.

    Raises:
        ConfigReleasedError: If the record was released
        ConfigSaveError: If the file cannot be written
    """
    config.ensure_usable()
    config_path = Path(config_path)
    key_file = config_to_key_file(config)

    try:
        key_file.save_to_file(config_path)
    except OSError as e:
        raise ConfigSaveError(f"Failed to save configuration {config_path}: {e}") from e


def load(config_path: Optional[PathLike] = None) -> Tuple[Optional[FsearchConfig], bool]:
    """Load the settings file.

    Args:
        config_path: Settings file, defaults to the per-user location

    Returns:
        ``(config, True)`` on success, ``(None, False)`` if the file is
        missing, unreadable or malformed
    """
    path = Path(config_path) if config_path is not None else config_file_path()
    try:
        config, _ = read_config(path)
    except ConfigNotFoundError:
        # First run, nothing saved yet
        logger.info(f"no config file at {path}")
        return None, False
    except ConfigLoadError as e:
        logger.error(f"load config failed: {e}")
        return None, False

    logger.info(f"loaded config file {path}")
    return config, True


def load_with_fallback(config_path: Optional[PathLike] = None) -> Tuple[FsearchConfig, bool]:
    """Load the settings file or fall back to defaults.

    Returns:
        Tuple of the record and whether it came from the file
    """
    config, loaded = load(config_path)
    if not loaded:
        logger.info("Using default configuration")
        return get_default_config(), False
    return config, True


def save(config: FsearchConfig, config_path: Optional[PathLike] = None) -> bool:
    """Save a configuration record, overwriting the settings file.

    Args:
        config: Record to save
        config_path: Settings file, defaults to the per-user location

    Returns:
        True if the file was written
    """
    path = Path(config_path) if config_path is not None else config_file_path()
    try:
        write_config(config, path)
    except ConfigError as e:
        logger.error(f"save config failed: {e}")
        return False

    logger.info(f"saved config file {path}")
    return True


def release(config: FsearchConfig) -> None:
    """Release a configuration record; it must not be used afterwards."""
    config.release()
