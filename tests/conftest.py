# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- A fixed local-noon reference time and a steppable clock
- An in-memory SnapshotStore that records every save
- TrafficAnalytics instances backed by in-memory or JSON file stores
- Event builders for the common event types
"""

from datetime import datetime, timedelta

import pytest

from storefront.analytics import TrafficAnalytics
from storefront.base.snapshot_store import SnapshotStore
from storefront.core.timestamps import to_iso
from storefront.infrastructure.storage import JsonSnapshotStore
from storefront.utils.config import get_settings

# Local noon, so "an hour ago" is always the same local calendar day
NOW = datetime(2026, 3, 15, 12, 0).astimezone()


# ==============================================================================
# Helpers
# ==============================================================================


class StepClock:
    """Clock returning a fixed time until advanced."""

    def __init__(self, start: datetime = NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class RecordingStore(SnapshotStore):
    """SnapshotStore keeping saves in memory."""

    def __init__(self, initial: list | None = None, fail: bool = False):
        self.initial = list(initial or [])
        self.fail = fail
        self.saves: list[list[dict]] = []

    def load(self) -> list:
        return list(self.initial)

    def save(self, records: list[dict]) -> bool:
        if self.fail:
            return False
        self.saves.append(list(records))
        return True

    @property
    def last_saved(self) -> list[dict] | None:
        return self.saves[-1] if self.saves else None


def ago(**kwargs) -> str:
    """ISO timestamp ``kwargs`` before NOW."""
    return to_iso(NOW - timedelta(**kwargs))


def page_view(session_id="s1", path="/", **extra) -> dict:
    return {"type": "pageView", "sessionId": session_id, "path": path, **extra}


def add_to_cart(product="Mic", session_id="s1", **extra) -> dict:
    return {
        "type": "conversion",
        "conversionType": "add_to_cart",
        "details": product,
        "sessionId": session_id,
        **extra,
    }


def product_click(product="Mic", session_id="s1", **extra) -> dict:
    return {
        "type": "interaction",
        "interactionType": "product_click",
        "details": product,
        "sessionId": session_id,
        **extra,
    }


def device(device_type, session_id="s1", **extra) -> dict:
    return {"type": "device", "deviceType": device_type, "sessionId": session_id, **extra}


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture()
def clock():
    return StepClock()


@pytest.fixture()
def event_store():
    return RecordingStore()


@pytest.fixture()
def insight_store():
    return RecordingStore()


@pytest.fixture()
def analytics(event_store, insight_store, clock):
    """TrafficAnalytics over in-memory stores with a fixed clock."""
    return TrafficAnalytics(event_store, insight_store, clock=clock)


@pytest.fixture()
def file_stores(tmp_path):
    """JSON file stores in a temporary directory."""
    return (
        JsonSnapshotStore(tmp_path / "traffic.json", "events"),
        JsonSnapshotStore(tmp_path / "insights.json", "insights"),
    )


@pytest.fixture()
def settings_env(tmp_path, monkeypatch):
    """Point settings at a temporary data directory, resetting the cache."""
    monkeypatch.setenv("ANALYTICS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TALLY_ENABLED", "false")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
