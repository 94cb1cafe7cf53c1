# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Pure domain logic with no I/O.

This module contains:
- Domain models (Product, SessionAggregate, summary results)
- Timestamp parsing and window membership
- Session index and time-window buckets
- Aggregation queries

All code here is framework-agnostic and easily unit-testable.
"""

from storefront.core.date_buckets import TimeWindowBuckets
from storefront.core.exceptions import (
    InvalidStockError,
    InventorySyncError,
    ProductNotFoundError,
    StorefrontError,
)
from storefront.core.models import (
    ConversionSummary,
    Dashboard,
    DeviceStats,
    EventType,
    Product,
    ProductStats,
    SessionAggregate,
    TrafficSummary,
    Window,
)
from storefront.core.session_index import SessionIndex

__all__ = [
    "ConversionSummary",
    "Dashboard",
    "DeviceStats",
    "EventType",
    "InvalidStockError",
    "InventorySyncError",
    "Product",
    "ProductNotFoundError",
    "ProductStats",
    "SessionAggregate",
    "SessionIndex",
    "StorefrontError",
    "TimeWindowBuckets",
    "TrafficSummary",
    "Window",
]
