# ==============================================================================
# Traffic Analytics
# ==============================================================================
"""
Traffic analytics: event tracking, insights, summaries, and periodic flush.
"""

from storefront.analytics.scheduler import PersistenceScheduler
from storefront.analytics.tracker import TrafficAnalytics

__all__ = [
    "PersistenceScheduler",
    "TrafficAnalytics",
]
