"""Configuration error types."""

from enum import Enum


class ConfigError(Exception):
    """Base class for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when the configuration file cannot be read or parsed."""


class ConfigNotFoundError(ConfigLoadError):
    """Raised when the configuration file does not exist yet."""


class ConfigSaveError(ConfigError):
    """Raised when the configuration cannot be serialized or written."""


class ConfigReleasedError(ConfigError):
    """Raised when a released configuration record is used again."""


class KeyFileErrorCode(Enum):
    """Failure categories of key file lookups and parsing."""

    PARSE = "parse"
    GROUP_NOT_FOUND = "group_not_found"
    KEY_NOT_FOUND = "key_not_found"
    INVALID_VALUE = "invalid_value"


class KeyFileError(ConfigError):
    """Key file error carrying a :class:`KeyFileErrorCode`."""

    def __init__(self, code: KeyFileErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def is_missing(self) -> bool:
        """True for missing groups or keys."""
        return self.code in (KeyFileErrorCode.GROUP_NOT_FOUND, KeyFileErrorCode.KEY_NOT_FOUND)
