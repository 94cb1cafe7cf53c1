# ==============================================================================
# Tests for TimeWindowBuckets
# ==============================================================================
"""
Unit tests for ingest-time window buckets.

Tests cover:
- Classification into today / lastWeek / lastMonth
- Membership frozen at classification time
- Independent oldest-first caps
"""

from datetime import timedelta

import pytest
from conftest import NOW, ago, page_view

from storefront.core.date_buckets import TimeWindowBuckets
from storefront.core.models import Window
from storefront.core.timestamps import to_iso


def _event(**kwargs) -> dict:
    return {**page_view(), "serverTimestamp": to_iso(NOW), **kwargs}


class TestClassify:
    """Tests for TimeWindowBuckets.classify()."""

    def test_server_timestamp_now_goes_everywhere(self):
        buckets = TimeWindowBuckets()
        windows = buckets.classify(_event(), NOW)
        assert windows == [Window.TODAY, Window.WEEKLY, Window.MONTHLY]
        assert buckets.sizes() == {"today": 1, "lastWeek": 1, "lastMonth": 1}

    def test_client_timestamp_takes_precedence(self):
        buckets = TimeWindowBuckets()
        buckets.classify(_event(timestamp=ago(days=10)), NOW)
        assert buckets.sizes() == {"today": 0, "lastWeek": 0, "lastMonth": 1}

    def test_old_event_goes_nowhere(self):
        buckets = TimeWindowBuckets()
        assert buckets.classify(_event(timestamp=ago(days=90)), NOW) == []

    def test_membership_is_not_reevaluated(self):
        """An event classified today stays in the today bucket the next day."""
        buckets = TimeWindowBuckets()
        event = _event()
        buckets.classify(event, NOW)
        buckets.classify(_event(path="/later"), NOW + timedelta(days=2))

        today = buckets.snapshot(Window.TODAY)
        assert event in today
        assert len(today) == 1  # the later event was classified against its own "now"

    def test_snapshot_by_bucket_name(self):
        buckets = TimeWindowBuckets()
        event = _event()
        buckets.classify(event, NOW)
        assert buckets.snapshot("lastWeek") == [event]
        assert buckets.snapshot("monthly") == [event]

    def test_unknown_bucket_name_raises(self):
        with pytest.raises(ValueError):
            TimeWindowBuckets().snapshot("yearly")


class TestCaps:
    """Tests for independent bucket caps."""

    def test_default_caps(self):
        buckets = TimeWindowBuckets()
        for i in range(1_050):
            buckets.classify(_event(path=f"/{i}"), NOW)

        today = buckets.snapshot(Window.TODAY)
        assert len(today) == 1_000
        assert today[0]["path"] == "/50"
        assert buckets.sizes()["lastWeek"] == 1_050

    def test_custom_caps_truncate_oldest_first(self):
        buckets = TimeWindowBuckets({Window.TODAY: 2, Window.WEEKLY: 3, Window.MONTHLY: 4})
        for i in range(5):
            buckets.classify(_event(path=f"/{i}"), NOW)

        assert [e["path"] for e in buckets.snapshot(Window.TODAY)] == ["/3", "/4"]
        assert [e["path"] for e in buckets.snapshot(Window.WEEKLY)] == ["/2", "/3", "/4"]
        assert len(buckets.snapshot(Window.MONTHLY)) == 4
