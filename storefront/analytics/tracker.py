# ==============================================================================
# Traffic Analytics
# ==============================================================================
"""
Event tracking and insight storage with on-demand summaries.

TrafficAnalytics is the single context object holding all analytics state:
- Event store: bounded log of tracking events, oldest evicted first
- Session index: per-session aggregates, updated on ingest
- Time-window buckets: ingest-time snapshots of recent events
- Insight store: bounded log of externally computed insights

Ingest is synchronous and returns nothing. The traffic file is flushed on
every ``flush_every``-th tracked event and the insights file on every
insight batch; PersistenceScheduler adds a periodic flush of both. Flush
failures are logged by the snapshot stores and never reach the caller.

Windowed summaries filter the event store against the current time on each
call, so they never depend on the ingest-time buckets.

Usage:
    analytics = TrafficAnalytics.from_settings()
    analytics.track_event({"type": "pageView", "path": "/", "sessionId": "s1"})
    summary = analytics.get_traffic_summary()
"""

import logging
import threading
from collections import deque
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Optional

from storefront.base.snapshot_store import SnapshotStore
from storefront.core import aggregations
from storefront.core.date_buckets import TimeWindowBuckets
from storefront.core.models import (
    ConversionSummary,
    Dashboard,
    DeviceStats,
    ProductStats,
    SessionAggregate,
    TrafficSummary,
    Window,
)
from storefront.core.session_index import SessionIndex
from storefront.core.timestamps import to_iso, utc_now
from storefront.infrastructure.storage import JsonSnapshotStore
from storefront.utils.config import AnalyticsSettings, get_settings

logger = logging.getLogger(__name__)

MAX_EVENTS = 10_000
MAX_INSIGHTS = 1_000
FLUSH_EVERY = 100


class TrafficAnalytics:
    """
    Analytics state and the operations on it.

    All mutation and snapshotting happens under one re-entrant lock, so the
    background flush can run while callers ingest and query.
    """

    def __init__(
        self,
        event_store: SnapshotStore,
        insight_store: SnapshotStore,
        max_events: int = MAX_EVENTS,
        max_insights: int = MAX_INSIGHTS,
        flush_every: int = FLUSH_EVERY,
        bucket_caps: Optional[dict[Window, int]] = None,
        top_products_limit: int = 5,
        high_priority_limit: int = 10,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize analytics state and load persisted snapshots.

        Args:
            event_store: Snapshot store for tracking events
            insight_store: Snapshot store for insights
            max_events: Event store capacity
            max_insights: Insight store capacity
            flush_every: Flush the event store every N tracked events
            bucket_caps: Per-window bucket capacity overrides
            top_products_limit: Number of products returned by get_top_products()
            high_priority_limit: Number of insights returned by
                                 get_high_priority_insights()
            clock: Returns the current time (aware datetime)
        """
        if flush_every <= 0:
            raise ValueError(f"flush_every must be positive, got {flush_every}")

        self._event_store = event_store
        self._insight_store = insight_store
        self._flush_every = flush_every
        self._top_products_limit = top_products_limit
        self._high_priority_limit = high_priority_limit
        self._clock = clock

        self._lock = threading.RLock()
        self._events: deque[dict] = deque(maxlen=max_events)
        self._insights: deque[dict] = deque(maxlen=max_insights)
        self._tracked_since_load = 0

        self.sessions = SessionIndex()
        self.buckets = TimeWindowBuckets(bucket_caps)

        self._load()

    @classmethod
    def from_settings(cls, settings: Optional[AnalyticsSettings] = None) -> "TrafficAnalytics":
        """Build an instance backed by the JSON files named in settings."""
        settings = settings or get_settings().analytics
        return cls(
            event_store=JsonSnapshotStore(settings.traffic_path, "events"),
            insight_store=JsonSnapshotStore(settings.insights_path, "insights"),
            max_events=settings.max_events,
            max_insights=settings.max_insights,
            flush_every=settings.flush_every,
            bucket_caps={
                Window.TODAY: settings.today_cap,
                Window.WEEKLY: settings.week_cap,
                Window.MONTHLY: settings.month_cap,
            },
            top_products_limit=settings.top_products_limit,
            high_priority_limit=settings.high_priority_limit,
        )

    def _load(self) -> None:
        """Restore persisted events and insights, rebuilding derived state."""
        now = self._clock()
        with self._lock:
            for event in self._event_store.load():
                if not isinstance(event, dict):
                    continue
                if not event.get("serverTimestamp"):
                    event["serverTimestamp"] = to_iso(now)
                self._events.append(event)
                self.sessions.on_event(event)
                self.buckets.classify(event, now)

            self._insights.extend(i for i in self._insight_store.load() if isinstance(i, dict))

    # ==========================================================================
    # Ingest
    # ==========================================================================

    def track_event(self, event: Mapping[str, Any]) -> None:
        """
        Record one tracking event.

        The event is copied, stamped with ``serverTimestamp`` and stored
        as-is; its fields are not validated. The event file is flushed on
        every ``flush_every``-th call since this instance loaded the files;
        events restored at load do not count towards it.

        Args:
            event: Event payload from the client

        Raises:
            TypeError: If the payload is not a mapping
        """
        if not isinstance(event, Mapping):
            raise TypeError(f"event must be a mapping, got {type(event).__name__}")

        with self._lock:
            now = self._clock()
            stored = dict(event)
            stored["serverTimestamp"] = to_iso(now)

            self._events.append(stored)
            self.sessions.on_event(stored)
            self.buckets.classify(stored, now)

            self._tracked_since_load += 1
            if self._tracked_since_load % self._flush_every == 0:
                self.flush_events()

    def save_insights(self, batch: Mapping[str, Any]) -> None:
        """
        Store a batch of insights reported by a client.

        Batches without an ``insights`` list are ignored. Each insight is
        enriched with the batch's ``sessionId``, the batch ``timestamp`` as
        ``clientTimestamp``, and a ``serverTimestamp``. Non-mapping entries
        are skipped. The insights file is flushed after every batch.

        Args:
            batch: ``{"sessionId": ..., "timestamp": ..., "insights": [...]}``
        """
        if not isinstance(batch, Mapping) or not isinstance(batch.get("insights"), list):
            logger.debug("Ignoring insight batch without an insights list")
            return

        with self._lock:
            server_timestamp = to_iso(self._clock())
            enriched = [
                {
                    **insight,
                    "sessionId": batch.get("sessionId"),
                    "clientTimestamp": batch.get("timestamp"),
                    "serverTimestamp": server_timestamp,
                }
                for insight in batch["insights"]
                if isinstance(insight, Mapping)
            ]
            self._insights.extend(enriched)
            self.flush_insights()

    # ==========================================================================
    # Persistence
    # ==========================================================================

    def flush_events(self) -> bool:
        """Write the event store to its snapshot store."""
        with self._lock:
            return self._event_store.save(list(self._events))

    def flush_insights(self) -> bool:
        """Write the insight store to its snapshot store."""
        with self._lock:
            return self._insight_store.save(list(self._insights))

    def flush(self) -> bool:
        """Write both stores. Returns True only if both writes succeeded."""
        with self._lock:
            events_ok = self.flush_events()
            insights_ok = self.flush_insights()
        return events_ok and insights_ok

    # ==========================================================================
    # Snapshots
    # ==========================================================================

    def __len__(self) -> int:
        return len(self._events)

    def get_events(self) -> list[dict]:
        """Stored events, oldest first."""
        with self._lock:
            return list(self._events)

    def get_insights(self) -> list[dict]:
        """Stored insights, oldest first."""
        with self._lock:
            return list(self._insights)

    def get_window_events(self, window: Window | str) -> list[dict]:
        """Events classified into ``window`` when they were ingested."""
        with self._lock:
            return self.buckets.snapshot(window)

    def get_session(self, session_id) -> Optional[SessionAggregate]:
        with self._lock:
            return self.sessions.get(session_id)

    def get_converting_sessions(self, min_conversions: int = 1) -> list[SessionAggregate]:
        """Sessions with at least ``min_conversions`` conversion events."""
        with self._lock:
            return self.sessions.sessions_with_conversions(min_conversions)

    # ==========================================================================
    # Summaries
    # ==========================================================================

    def get_high_priority_insights(self) -> list[dict]:
        return aggregations.high_priority_insights(
            self.get_insights(), limit=self._high_priority_limit
        )

    def get_traffic_summary(self) -> TrafficSummary:
        return aggregations.traffic_summary(self.get_events(), self._clock())

    def get_conversion_summary(self) -> ConversionSummary:
        return aggregations.conversion_summary(self.get_events(), self._clock())

    def get_top_products(self) -> list[ProductStats]:
        return aggregations.top_products(self.get_events(), limit=self._top_products_limit)

    def get_device_stats(self) -> DeviceStats:
        return aggregations.device_stats(self.get_events())

    def get_dashboard(self) -> Dashboard:
        """All admin dashboard summaries computed from one snapshot."""
        with self._lock:
            events = list(self._events)
            insights = list(self._insights)
        now = self._clock()
        return Dashboard(
            traffic=aggregations.traffic_summary(events, now),
            conversions=aggregations.conversion_summary(events, now),
            top_products=aggregations.top_products(events, limit=self._top_products_limit),
            device_stats=aggregations.device_stats(events),
            insights=aggregations.high_priority_insights(
                insights, limit=self._high_priority_limit
            ),
        )
