# ==============================================================================
# Storefront Utilities
# ==============================================================================
"""
Shared utilities: configuration, paths, retry policy, and versions.
"""

from storefront.utils.config import (
    AnalyticsSettings,
    InventorySettings,
    Settings,
    get_settings,
)

__all__ = [
    "AnalyticsSettings",
    "InventorySettings",
    "Settings",
    "get_settings",
]
