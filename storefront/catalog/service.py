# ==============================================================================
# Catalog Service
# ==============================================================================
"""
In-memory product catalog kept in step with an inventory service.

Stock changes are applied locally first and then pushed to the inventory
service; inventory failures propagate to the caller as InventorySyncError
after the local change has been made.
"""

import logging
from typing import Any, Optional

from storefront.base.inventory import InventoryService
from storefront.catalog.products import DEFAULT_PRODUCTS
from storefront.core.exceptions import InvalidStockError, ProductNotFoundError
from storefront.core.models import Product

logger = logging.getLogger(__name__)


class Catalog:
    """Product list with stock levels backed by an inventory service."""

    def __init__(
        self,
        inventory: InventoryService,
        products: Optional[list[Product]] = None,
    ):
        self._inventory = inventory
        source = DEFAULT_PRODUCTS if products is None else products
        self._products: list[Product] = [p.model_copy() for p in source]

    def list_products(self) -> list[Product]:
        return list(self._products)

    def get_product(self, product_id: int) -> Product:
        """
        Look up a product by id.

        Raises:
            ProductNotFoundError: If no product has this id
        """
        for product in self._products:
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def update_stock(self, product_id: int, new_stock: Any) -> Product:
        """
        Set a product's stock locally and in the inventory service.

        Args:
            product_id: Product to update
            new_stock: New stock level (int or integer string)

        Returns:
            The updated product

        Raises:
            InvalidStockError: If new_stock is not a non-negative integer
            ProductNotFoundError: If no product has this id
            InventorySyncError: If the inventory service cannot be reached
        """
        stock = parse_stock(new_stock)
        product = self.get_product(product_id)

        product.stock = stock
        logger.info("Stock for %s set to %d", product.name, stock)

        if not self._inventory.update_stock(product.name, stock):
            logger.warning("Inventory service did not accept stock update for %s", product.name)
        return product

    def sync(self) -> list[Product]:
        """
        Refresh all stock levels from the inventory service.

        Raises:
            InventorySyncError: If the inventory service cannot be read
        """
        logger.info("Starting inventory sync for %d products", len(self._products))
        self._products = self._inventory.sync_inventory(self._products)
        logger.info("Inventory sync complete")
        return self.list_products()


def parse_stock(value: Any) -> int:
    """
    Validate a stock value.

    Raises:
        InvalidStockError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise InvalidStockError(f"Invalid stock value: {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise InvalidStockError(f"Invalid stock value: {value!r}") from None
    if not isinstance(value, int) or value < 0:
        raise InvalidStockError(f"Invalid stock value: {value!r}")
    return value
