# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes for the ports the analytics and catalog code depend on.

Concrete implementations live in infrastructure/.
"""

from storefront.base.inventory import InventoryService
from storefront.base.snapshot_store import SnapshotStore

__all__ = [
    "InventoryService",
    "SnapshotStore",
]
