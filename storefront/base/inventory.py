# ==============================================================================
# Inventory Service Abstract Base Class
# ==============================================================================
"""
Abstract interface for the external inventory system (ERP).

The catalog reads stock levels from, and pushes stock changes to, an
inventory service. Implementations in infrastructure/ provide an in-memory
store and a Tally ERP client.
"""

from abc import ABC, abstractmethod

from storefront.core.models import Product


class InventoryService(ABC):
    """Source of truth for stock levels, keyed by product name."""

    @abstractmethod
    def get_stock(self) -> dict[str, int]:
        """
        Fetch current stock levels.

        Returns:
            Dict mapping product name to units in stock

        Raises:
            InventorySyncError: If the inventory system cannot be read
        """
        ...

    @abstractmethod
    def update_stock(self, product_name: str, quantity: int) -> bool:
        """
        Set the stock level for one product.

        Args:
            product_name: Product name as known to the inventory system
            quantity: New units in stock

        Returns:
            True if the inventory system accepted the update

        Raises:
            InventorySyncError: If the inventory system cannot be reached
        """
        ...

    def sync_inventory(self, products: list[Product]) -> list[Product]:
        """
        Refresh product stock levels from the inventory system.

        Products unknown to the inventory system keep their current stock.

        Args:
            products: Products to refresh

        Returns:
            New list of products with updated stock levels
        """
        stock = self.get_stock()
        return [
            product.model_copy(update={"stock": stock[product.name]})
            if product.name in stock
            else product
            for product in products
        ]
