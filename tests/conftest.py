from __future__ import annotations

import pytest

from pulseboard.config import get_settings
from pulseboard.models import Event
from pulseboard.sample_data import load_sample_events, seed_store
from pulseboard.store import EventStore


@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch: pytest.MonkeyPatch):
    """Keep environment-driven settings from leaking between tests."""
    for name in ("PULSEBOARD_PAGE_OVERFLOW", "PULSEBOARD_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_events() -> list[Event]:
    return load_sample_events()


@pytest.fixture
def sample_store() -> EventStore:
    store = EventStore()
    seed_store(store)
    return store
