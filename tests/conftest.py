"""Pytest configuration and shared fixtures for web helpers tests."""

import sys
from pathlib import Path

import pytest
import structlog


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from web_helpers.config import get_settings
from web_helpers.i18n import reset_language


# ==================== Isolation ====================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Run every test with default settings and no config files around."""
    for name in ("ENVIRONMENT", "DEBUG", "LANGUAGE", "HOST_INFO", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(f"WEB_HELPERS_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def default_language():
    """Drop language overrides between tests."""
    reset_language()
    yield
    reset_language()


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after tests which configure logging."""
    yield
    structlog.reset_defaults()


# ==================== Data Fixtures ====================


class Product:
    """Plain object for attribute lookups."""

    def __init__(self, field):
        self.field = field


@pytest.fixture
def template_vars() -> dict:
    """Variables for template substitution tests."""
    return {
        "color": "red ",
        "prod": {
            "name": "<Чайник>",
            "price": "",
        },
        "obj": Product(12345),
    }


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """Directory for YAML settings files (settings/ in the working directory)."""
    path = tmp_path / "settings"
    path.mkdir()
    return path
