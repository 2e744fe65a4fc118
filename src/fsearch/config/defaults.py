"""Default configuration values."""

from ..models.config import FsearchConfig


def get_default_config() -> FsearchConfig:
    """Get the configuration used when no settings file is available.

    Unlike a missing ``limit_results`` key in an existing file, which
    falls back to ``False``, standalone defaults enable the result limit.
    """
    config = FsearchConfig()
    config.limit_results = True
    return config


load_defaults = get_default_config
