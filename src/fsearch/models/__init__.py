"""Data models for fsearch."""

from .config import FsearchConfig, INTERFACE_FIELDS, SEARCH_FIELDS

__all__ = [
    "FsearchConfig",
    "INTERFACE_FIELDS",
    "SEARCH_FIELDS",
]
