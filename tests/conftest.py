"""Shared pytest fixtures for Daybook tests."""

from __future__ import annotations

import pytest

from daybook.config import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch):
    """Isolate every test from cached settings and stray environment variables."""
    for name in ("DAYBOOK_DEFAULT_SERIES_START_TIME", "DAYBOOK_DEFAULT_SERIES_END_TIME"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
