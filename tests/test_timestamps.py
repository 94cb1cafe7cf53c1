# ==============================================================================
# Tests for Timestamps and Window Bounds
# ==============================================================================
"""
Unit tests for timestamp parsing and window membership.

Tests cover:
- ISO-8601 strings, epoch milliseconds, and unparseable values
- Effective timestamp fallback to the server timestamp
- today / weekly / monthly boundaries
- Calendar-month subtraction at month ends
"""

from datetime import datetime, timedelta, timezone

from conftest import NOW, ago

from storefront.core.models import Window
from storefront.core.timestamps import (
    WindowBounds,
    effective_timestamp,
    parse_timestamp,
    to_iso,
)


# ==============================================================================
# Parsing
# ==============================================================================


class TestParseTimestamp:
    """Tests for parse_timestamp()."""

    def test_iso_with_z_suffix(self):
        parsed = parse_timestamp("2024-05-01T10:30:00.000Z")
        assert parsed == datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)

    def test_epoch_milliseconds(self):
        parsed = parse_timestamp(1714559400000)
        assert parsed == datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)

    def test_result_is_timezone_aware(self):
        assert parse_timestamp("2024-05-01T10:30:00").tzinfo is not None

    def test_unparseable_string_is_none(self):
        assert parse_timestamp("not a date") is None

    def test_partial_dates_are_none(self):
        """Strings without a full calendar date are not completed from today."""
        assert parse_timestamp("Monday") is None
        assert parse_timestamp("5") is None
        assert parse_timestamp("May 5") is None

    def test_free_form_full_date(self):
        parsed = parse_timestamp("May 1, 2024 10:30 UTC")
        assert parsed == datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)

    def test_missing_values_are_none(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None
        assert parse_timestamp(True) is None
        assert parse_timestamp({"when": "now"}) is None

    def test_to_iso_format(self):
        moment = datetime(2024, 5, 1, 10, 30, 0, 123456, tzinfo=timezone.utc)
        assert to_iso(moment) == "2024-05-01T10:30:00.123Z"


class TestEffectiveTimestamp:
    """Tests for effective_timestamp()."""

    def test_prefers_client_timestamp(self):
        event = {"timestamp": "2024-01-01T00:00:00Z", "serverTimestamp": "2024-02-01T00:00:00Z"}
        assert effective_timestamp(event).month == 1

    def test_falls_back_to_server_timestamp(self):
        event = {"serverTimestamp": "2024-02-01T00:00:00Z"}
        assert effective_timestamp(event) == datetime(2024, 2, 1, tzinfo=timezone.utc)

    def test_unparseable_client_timestamp_is_not_replaced(self):
        """A present but invalid client timestamp yields no timestamp at all."""
        event = {"timestamp": "garbage", "serverTimestamp": "2024-02-01T00:00:00Z"}
        assert effective_timestamp(event) is None


# ==============================================================================
# Window Bounds
# ==============================================================================


class TestWindowBounds:
    """Tests for WindowBounds membership."""

    def test_recent_event_in_all_windows(self):
        bounds = WindowBounds.at(NOW)
        moment = parse_timestamp(ago(hours=1))
        assert bounds.windows_for(moment) == [Window.TODAY, Window.WEEKLY, Window.MONTHLY]

    def test_three_days_ago_not_today(self):
        bounds = WindowBounds.at(NOW)
        moment = parse_timestamp(ago(days=3))
        assert bounds.windows_for(moment) == [Window.WEEKLY, Window.MONTHLY]

    def test_twenty_days_ago_monthly_only(self):
        bounds = WindowBounds.at(NOW)
        moment = parse_timestamp(ago(days=20))
        assert bounds.windows_for(moment) == [Window.MONTHLY]

    def test_forty_days_ago_in_no_window(self):
        bounds = WindowBounds.at(NOW)
        assert bounds.windows_for(parse_timestamp(ago(days=40))) == []

    def test_week_boundary_is_inclusive(self):
        bounds = WindowBounds.at(NOW)
        assert bounds.contains(Window.WEEKLY, NOW - timedelta(days=7))
        assert not bounds.contains(Window.WEEKLY, NOW - timedelta(days=7, seconds=1))

    def test_future_event_counts_in_rolling_windows(self):
        bounds = WindowBounds.at(NOW)
        assert bounds.contains(Window.WEEKLY, NOW + timedelta(days=3))
        assert not bounds.contains(Window.TODAY, NOW + timedelta(days=3))

    def test_missing_timestamp_in_no_window(self):
        assert WindowBounds.at(NOW).windows_for(None) == []

    def test_month_subtraction_clamps_to_month_end(self):
        """Mar 31 minus one month is the last day of February."""
        now = datetime(2025, 3, 31, 12, 0).astimezone()
        bounds = WindowBounds.at(now)
        assert bounds.month_start.date() == datetime(2025, 2, 28).date()

    def test_month_subtraction_across_year(self):
        now = datetime(2026, 1, 10, 12, 0).astimezone()
        assert WindowBounds.at(now).month_start.date() == datetime(2025, 12, 10).date()
