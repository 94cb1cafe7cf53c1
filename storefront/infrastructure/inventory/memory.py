# ==============================================================================
# In-Memory Inventory Service
# ==============================================================================
"""
InventoryService backed by a plain dict.

Used when no ERP is configured, and as the test double for catalog code.
"""

import logging

from storefront.base.inventory import InventoryService

logger = logging.getLogger(__name__)


class InMemoryInventoryService(InventoryService):
    """Stock levels held in process memory."""

    def __init__(self, stock: dict[str, int] | None = None):
        self._stock: dict[str, int] = dict(stock or {})

    def get_stock(self) -> dict[str, int]:
        return dict(self._stock)

    def update_stock(self, product_name: str, quantity: int) -> bool:
        self._stock[product_name] = quantity
        logger.debug("Stock for %s set to %d", product_name, quantity)
        return True
