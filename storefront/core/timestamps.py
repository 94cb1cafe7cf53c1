# ==============================================================================
# Timestamps and Time Windows
# ==============================================================================
"""
Timestamp parsing and rolling window membership.

Clients send timestamps as ISO-8601 strings or as epoch milliseconds. Events
whose timestamp cannot be parsed belong to no window. Calendar comparisons
("today") use the server's local time zone; naive timestamps are read as
local time.

Window boundaries relative to ``now``:
- today:   same local calendar date as ``now``
- weekly:  at or after ``now - 7 days``
- monthly: at or after ``now - 1 calendar month`` (dateutil semantics,
           so Mar 31 minus one month is the last day of February)
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from storefront.core.models import Window


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a client or server timestamp.

    Args:
        value: ISO-8601 string, epoch milliseconds, or datetime

    Returns:
        Aware datetime, or None if the value is missing or unparseable
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.astimezone()
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value:
        try:
            return date_parser.isoparse(value).astimezone()
        except (OverflowError, OSError, ValueError):
            pass
        return _parse_full_date(value)
    return None


# Two unrelated defaults: a string missing its year, month or day parses to
# different dates against each
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _parse_full_date(value: str) -> datetime | None:
    """Free-form date string such as "May 1, 2024 10:30"; None unless a full date is given."""
    try:
        first, second = (date_parser.parse(value, default=d) for d in _FILL_DEFAULTS)
    except (OverflowError, OSError, ValueError):
        return None
    if first.date() != second.date():
        return None
    return first.astimezone()


def effective_timestamp(event: dict) -> datetime | None:
    """Client timestamp when present, otherwise the server timestamp."""
    return parse_timestamp(event.get("timestamp") or event.get("serverTimestamp"))


@dataclass(frozen=True)
class WindowBounds:
    """Window boundaries computed once from a reference time."""

    today: date
    week_start: datetime
    month_start: datetime

    @classmethod
    def at(cls, now: datetime) -> "WindowBounds":
        local_now = now.astimezone()
        return cls(
            today=local_now.date(),
            week_start=local_now - relativedelta(days=7),
            month_start=local_now - relativedelta(months=1),
        )

    def contains(self, window: Window, moment: datetime | None) -> bool:
        """Check whether ``moment`` falls inside ``window``."""
        if moment is None:
            return False
        if window is Window.TODAY:
            return moment.astimezone().date() == self.today
        if window is Window.WEEKLY:
            return moment >= self.week_start
        return moment >= self.month_start

    def windows_for(self, moment: datetime | None) -> list[Window]:
        """All windows containing ``moment``, in today/weekly/monthly order."""
        return [w for w in Window if self.contains(w, moment)]
