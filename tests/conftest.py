"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' and
'import main' work, and provides shared environment fixtures.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import reset_settings  # noqa: E402

APP_KEYS = ("HOME", "DESTROY_DATABASE", "COUNT")


@pytest.fixture
def valid_environ():
    """A complete, valid environment mapping for AppConfig."""
    return {"HOME": "/", "DESTROY_DATABASE": "true", "COUNT": "1"}


@pytest.fixture
def clean_process_env(monkeypatch):
    """
    Remove AppConfig's variables from the real process environment.

    Tests that exercise the "no override" path use this so the result does
    not depend on the machine running the suite (HOME is usually set).
    """
    for key in APP_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def fresh_settings_singleton():
    """Clear the cached get_settings() object around every test."""
    reset_settings()
    yield
    reset_settings()
