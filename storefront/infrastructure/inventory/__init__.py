# ==============================================================================
# Inventory Infrastructure
# ==============================================================================
"""
InventoryService implementations.

Available implementations:
- InMemoryInventoryService: dict-backed, for local runs and tests
- TallyInventoryService: Tally ERP XML-over-HTTP client
"""

from storefront.base.inventory import InventoryService
from storefront.infrastructure.inventory.memory import InMemoryInventoryService
from storefront.infrastructure.inventory.tally import TallyInventoryService
from storefront.utils.config import get_settings


def get_inventory_service(initial_stock: dict[str, int] | None = None) -> InventoryService:
    """
    Build the configured inventory service.

    Args:
        initial_stock: Seed for the in-memory service when Tally is disabled

    Returns:
        TallyInventoryService if Tally is enabled, else InMemoryInventoryService
    """
    settings = get_settings()
    if settings.inventory.enabled:
        return TallyInventoryService(settings.inventory)
    return InMemoryInventoryService(initial_stock)


__all__ = [
    "InMemoryInventoryService",
    "TallyInventoryService",
    "get_inventory_service",
]
