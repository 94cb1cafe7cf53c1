# ==============================================================================
# Aggregation Queries - Pure Domain Logic
# ==============================================================================
"""
Read-only summaries over stored events and insights.

Every function takes the records to scan and, where windows apply, the
reference time. Nothing is cached; each call rescans its input. Events
missing the fields a summary needs are skipped, which shows up as lower
counts rather than errors.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from json import dumps

from storefront.core.models import (
    ConversionSummary,
    DeviceCounts,
    DevicePercentages,
    DeviceStats,
    EventType,
    ProductStats,
    TrafficSummary,
    Window,
    WindowCounts,
    WindowRates,
)
from storefront.core.timestamps import WindowBounds, effective_timestamp, parse_timestamp, to_iso

ADD_TO_CART = "add_to_cart"
PRODUCT_CLICK = "product_click"
HIGH_PRIORITY = "high"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def traffic_summary(events: Iterable[dict], now: datetime) -> TrafficSummary:
    """
    Unique page views and unique sessions per window.

    A page view is unique per ``(sessionId, path)`` pair. Page views without
    a session id or a parseable timestamp are skipped.
    """
    bounds = WindowBounds.at(now)
    page_views: dict[Window, set] = {w: set() for w in Window}
    sessions: dict[Window, set] = {w: set() for w in Window}

    for event in events:
        if event.get("type") != EventType.PAGE_VIEW.value:
            continue
        session_id = event.get("sessionId")
        moment = effective_timestamp(event)
        if moment is None or not session_id:
            continue

        page_view_id = f"{session_id}:{event.get('path')}"
        for window in bounds.windows_for(moment):
            page_views[window].add(page_view_id)
            sessions[window].add(_session_key(session_id))

    return TrafficSummary(
        page_views=_counts({w: len(s) for w, s in page_views.items()}),
        sessions=_counts({w: len(s) for w, s in sessions.items()}),
        timestamp=to_iso(now),
    )


def conversion_rate(conversions: int, page_views: int) -> float:
    """Conversions per hundred page views, rounded half up to 2 places; 0 without page views."""
    if page_views == 0:
        return 0
    return _round_half_up(conversions / page_views * 100, 2)


def conversion_summary(events: Iterable[dict], now: datetime) -> ConversionSummary:
    """Add-to-cart conversions and conversion rate per window."""
    bounds = WindowBounds.at(now)
    conversions = {w: 0 for w in Window}
    page_views = {w: 0 for w in Window}

    for event in events:
        is_cart_add = _is_cart_add(event)
        is_page_view = event.get("type") == EventType.PAGE_VIEW.value
        if not (is_cart_add or is_page_view):
            continue
        for window in bounds.windows_for(effective_timestamp(event)):
            if is_cart_add:
                conversions[window] += 1
            else:
                page_views[window] += 1

    return ConversionSummary(
        conversions=_counts(conversions),
        rates=WindowRates(
            **{w.value: conversion_rate(conversions[w], page_views[w]) for w in Window}
        ),
        timestamp=to_iso(now),
    )


def top_products(events: Iterable[dict], limit: int = 5) -> list[ProductStats]:
    """
    Products ranked by product clicks plus cart adds.

    The product is identified by the event's ``details`` field. Ties keep
    the order in which products were first encountered.
    """
    products: dict[str, ProductStats] = {}

    for event in events:
        is_click = (
            event.get("type") == EventType.INTERACTION.value
            and event.get("interactionType") == PRODUCT_CLICK
        )
        is_cart_add = _is_cart_add(event)
        if not (is_click or is_cart_add):
            continue

        product = event.get("details")
        if not product:
            continue

        key = _product_key(product)
        stats = products.get(key)
        if stats is None:
            stats = products[key] = ProductStats(name=product)

        if is_click:
            stats.views += 1
        else:
            stats.cart_adds += 1

    ranked = sorted(products.values(), key=lambda p: p.total, reverse=True)
    return ranked[:limit]


def device_stats(events: Iterable[dict]) -> DeviceStats:
    """Device distribution of ``device`` events, with percentages to 1 place."""
    counts = DeviceCounts()

    for event in events:
        if event.get("type") != EventType.DEVICE.value:
            continue
        device_type = event.get("deviceType")
        if not device_type:
            continue
        device_type = str(device_type).lower()
        if device_type == "desktop":
            counts.desktop += 1
        elif device_type == "mobile":
            counts.mobile += 1
        else:
            counts.unknown += 1

    total = counts.total
    if total == 0:
        return DeviceStats(counts=counts, percentages=DevicePercentages())

    return DeviceStats(
        counts=counts,
        percentages=DevicePercentages(
            desktop=_round_half_up(counts.desktop / total * 100, 1),
            mobile=_round_half_up(counts.mobile / total * 100, 1),
            unknown=_round_half_up(counts.unknown / total * 100, 1),
        ),
    )


def high_priority_insights(insights: Iterable[dict], limit: int = 10) -> list[dict]:
    """Most recent ``priority == "high"`` insights by server timestamp, newest first."""
    high = [i for i in insights if i.get("priority") == HIGH_PRIORITY]
    high.sort(key=lambda i: parse_timestamp(i.get("serverTimestamp")) or _EPOCH, reverse=True)
    return high[:limit]


# ==============================================================================
# Helpers
# ==============================================================================


def _is_cart_add(event: dict) -> bool:
    return (
        event.get("type") == EventType.CONVERSION.value
        and event.get("conversionType") == ADD_TO_CART
    )


def _round_half_up(value: float, places: int) -> float:
    # Exact halves round up: 6.25 -> 6.3
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def _counts(values: dict[Window, int]) -> WindowCounts:
    return WindowCounts(**{w.value: values[w] for w in Window})


def _product_key(product) -> str:
    if isinstance(product, str):
        return product
    return dumps(product, sort_keys=True, default=str)


def _session_key(session_id) -> str:
    # 1 and "1" are the same session
    if isinstance(session_id, (dict, list)):
        return dumps(session_id, sort_keys=True, default=str)
    return str(session_id)
