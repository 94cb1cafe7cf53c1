# ==============================================================================
# Storefront Domain Models
# ==============================================================================
"""
Pydantic models for products, session aggregates, and analytics results.

Tracking events and insights are kept as plain dicts exactly as the client
sent them. These models cover the shapes the backend itself produces:
- Products in the catalog
- Per-session aggregates built by the session index
- Summary results returned by the aggregation queries

Result models serialize with camelCase aliases so ``model_dump(by_alias=True)``
matches the JSON the dashboard consumes.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    """Event types the aggregation queries understand."""

    PAGE_VIEW = "pageView"
    CONVERSION = "conversion"
    INTERACTION = "interaction"
    DEVICE = "device"


class Window(str, Enum):
    """Rolling time windows used by the summaries."""

    TODAY = "today"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==============================================================================
# Catalog
# ==============================================================================


class Product(BaseModel):
    """
    A product sold in the storefront.

    Attributes:
        id: Catalog identifier
        name: Display name, also the key used by the inventory service
        description: Short marketing description
        price: Unit price
        stock: Units on hand
        image: Relative image path
    """

    id: int = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    description: str = Field(default="", description="Product description")
    price: float = Field(..., description="Unit price")
    stock: int = Field(default=0, description="Units in stock")
    image: str = Field(default="images/placeholder.jpg", description="Image path")


# ==============================================================================
# Sessions
# ==============================================================================


class SessionAggregate(_CamelModel):
    """
    Running totals for one client session.

    Counters reflect every event ever attributed to the session, including
    events since evicted from the event store.
    """

    session_id: str | int
    events: list[dict] = Field(default_factory=list)
    page_views: int = 0
    conversions: int = 0
    first_seen: Any = None
    last_seen: Any = None

    @property
    def event_count(self) -> int:
        return len(self.events)


# ==============================================================================
# Query Results
# ==============================================================================


class WindowCounts(_CamelModel):
    """Counts for the today / weekly / monthly windows."""

    today: int = 0
    weekly: int = 0
    monthly: int = 0


class WindowRates(_CamelModel):
    """Percentages for the today / weekly / monthly windows."""

    today: float = 0
    weekly: float = 0
    monthly: float = 0


class TrafficSummary(_CamelModel):
    """Unique page views and sessions per window."""

    page_views: WindowCounts
    sessions: WindowCounts
    timestamp: str


class ConversionSummary(_CamelModel):
    """Add-to-cart conversions and conversion rates per window."""

    conversions: WindowCounts
    rates: WindowRates
    timestamp: str


class ProductStats(_CamelModel):
    """Interaction totals for one product."""

    name: Any
    views: int = 0
    cart_adds: int = 0

    @property
    def total(self) -> int:
        return self.views + self.cart_adds


class DeviceCounts(_CamelModel):
    desktop: int = 0
    mobile: int = 0
    unknown: int = 0

    @property
    def total(self) -> int:
        return self.desktop + self.mobile + self.unknown


class DevicePercentages(_CamelModel):
    desktop: float = 0
    mobile: float = 0
    unknown: float = 0


class DeviceStats(_CamelModel):
    """Device distribution of ``device`` events."""

    counts: DeviceCounts
    percentages: DevicePercentages


class Dashboard(_CamelModel):
    """Everything the admin dashboard shows in one payload."""

    traffic: TrafficSummary
    conversions: ConversionSummary
    top_products: list[ProductStats]
    device_stats: DeviceStats
    insights: list[dict]
