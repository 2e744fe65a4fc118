"""
Pytest configuration and shared fixtures.
"""

import logging
from pathlib import Path

import pytest

from fsearch.config.paths import CONFIG_FILE_NAME


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI tests reconfigure the root logger; put it back afterwards."""
    root_logger = logging.getLogger()
    package_logger = logging.getLogger("fsearch")
    handlers = root_logger.handlers[:]
    level = root_logger.level
    package_level = package_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    package_logger.setLevel(package_level)


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """Configuration directory that does not exist yet."""
    return tmp_path / "config" / "fsearch"


@pytest.fixture
def config_file(config_dir) -> Path:
    """Path of the settings file inside ``config_dir``."""
    return config_dir / CONFIG_FILE_NAME


@pytest.fixture
def write_config_file(config_file):
    """Write raw settings file content and return its path."""
    def _write(content: str) -> Path:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(content, encoding="utf-8")
        return config_file
    return _write


@pytest.fixture
def full_config_text() -> str:
    """Settings file as written by the application."""
    return (
        "[Interface]\n"
        "enable_list_tooltips=false\n"
        "enable_dark_theme=true\n"
        "show_menubar=false\n"
        "show_statusbar=true\n"
        "show_filter=false\n"
        "show_search_button=true\n"
        "\n"
        "[Search]\n"
        "search_in_path=true\n"
        "enable_regex=true\n"
        "match_case=true\n"
        "limit_results=true\n"
        "num_results=250\n"
        "\n"
        "[Database]\n"
        "location_1=/home/user\n"
        "location_2=/mnt/data\n"
    )
