# ==============================================================================
# Persistence Scheduler
# ==============================================================================
"""
Fixed-interval background flush of the analytics stores.

Runs TrafficAnalytics.flush() on an APScheduler background thread every
``interval_seconds``, independent of the flushes triggered by ingest. Both
paths replace whole files, so whichever write lands last wins.

Usage:
    scheduler = PersistenceScheduler(analytics, interval_seconds=60)
    scheduler.start()
    ...
    scheduler.shutdown()
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from storefront.analytics.tracker import TrafficAnalytics

logger = logging.getLogger(__name__)

FLUSH_JOB_ID = "flush-analytics"


class PersistenceScheduler:
    """Periodic flush of a TrafficAnalytics instance."""

    def __init__(
        self,
        analytics: TrafficAnalytics,
        interval_seconds: int = 60,
        flush_on_shutdown: bool = True,
    ):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self._analytics = analytics
        self._interval = interval_seconds
        self._flush_on_shutdown = flush_on_shutdown
        self._scheduler = BackgroundScheduler(daemon=True)

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def interval_seconds(self) -> int:
        return self._interval

    def start(self) -> None:
        """Start flushing every interval. Calling start() twice is a no-op."""
        if self.running:
            return
        self._scheduler.add_job(
            self.run_now,
            trigger=IntervalTrigger(seconds=self._interval),
            id=FLUSH_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.start()
        logger.info("Persistence scheduler started (every %ds)", self._interval)

    def shutdown(self) -> None:
        """Stop the scheduler, flushing once more if configured to."""
        if not self.running:
            return
        self._scheduler.shutdown(wait=False)
        logger.info("Persistence scheduler stopped")
        if self._flush_on_shutdown:
            self.run_now()

    def run_now(self) -> bool:
        """
        Flush both stores immediately.

        Returns:
            True if both files were written
        """
        try:
            ok = self._analytics.flush()
        except Exception as e:
            logger.error("Scheduled analytics flush failed: %s", e)
            return False
        if not ok:
            logger.warning("Scheduled analytics flush did not complete")
        return ok
