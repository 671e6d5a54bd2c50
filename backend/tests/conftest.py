"""Root conftest — shared test configuration."""

import os

import pytest

from wager_guard.config import get_settings

# Tests never pick up a developer's .env overrides for limits
os.environ.setdefault("WAGER_MAX_REMAINING_ACCOUNTS", "10")
os.environ.setdefault("WAGER_LOG_FORMAT", "json")


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop the cached Settings so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
