"""FSearch configuration persistence."""

__version__ = "0.1.0"
