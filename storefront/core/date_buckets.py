# ==============================================================================
# Time-Window Buckets
# ==============================================================================
"""
Ingest-time snapshots of recent events.

Each event is classified once, when it is ingested, into the ``today``,
``lastWeek`` and ``lastMonth`` buckets whose condition holds at that moment.
Membership is never re-evaluated: an event classified as "today" stays in
the ``today`` bucket after midnight. The summaries therefore do not read
these buckets; they filter the event store at query time instead. The
buckets back the "recent events" feed only.
"""

from collections import deque
from datetime import datetime

from storefront.core.models import Window
from storefront.core.timestamps import WindowBounds, effective_timestamp

# Bucket names as exposed to callers
BUCKET_NAMES = {
    Window.TODAY: "today",
    Window.WEEKLY: "lastWeek",
    Window.MONTHLY: "lastMonth",
}

DEFAULT_CAPS = {
    Window.TODAY: 1000,
    Window.WEEKLY: 7000,
    Window.MONTHLY: 30000,
}


class TimeWindowBuckets:
    """Three independently capped buckets, truncated oldest-first."""

    def __init__(self, caps: dict[Window, int] | None = None):
        caps = {**DEFAULT_CAPS, **(caps or {})}
        self._buckets: dict[Window, deque] = {
            window: deque(maxlen=caps[window]) for window in Window
        }

    def classify(self, event: dict, now: datetime) -> list[Window]:
        """
        Append ``event`` to every bucket whose window contains it at ``now``.

        Args:
            event: Stored event dict (carries ``serverTimestamp``)
            now: Reference time for the window boundaries

        Returns:
            The windows the event was added to
        """
        windows = WindowBounds.at(now).windows_for(effective_timestamp(event))
        for window in windows:
            self._buckets[window].append(event)
        return windows

    def snapshot(self, window: Window | str) -> list[dict]:
        """Copy of a bucket's events, oldest first.

        Accepts a ``Window`` or a bucket name (``today``, ``lastWeek``,
        ``lastMonth``).
        """
        return list(self._buckets[_resolve(window)])

    def sizes(self) -> dict[str, int]:
        return {BUCKET_NAMES[w]: len(bucket) for w, bucket in self._buckets.items()}

    def clear(self) -> None:
        for bucket in self._buckets.values():
            bucket.clear()


def _resolve(window: Window | str) -> Window:
    if isinstance(window, Window):
        return window
    for candidate, name in BUCKET_NAMES.items():
        if window == name:
            return candidate
    return Window(window)
