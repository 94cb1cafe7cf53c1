# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Adapters for external resources (ports-and-adapters architecture).

This module contains concrete implementations of the base/ interfaces:
- storage/ - Snapshot stores (JSON files)
- inventory/ - Inventory services (in-memory, Tally ERP)
"""

from storefront.infrastructure.inventory import (
    InMemoryInventoryService,
    TallyInventoryService,
    get_inventory_service,
)
from storefront.infrastructure.storage import JsonSnapshotStore

__all__ = [
    # Inventory
    "InMemoryInventoryService",
    "TallyInventoryService",
    "get_inventory_service",
    # Storage
    "JsonSnapshotStore",
]
