# ==============================================================================
# Tests for Catalog
# ==============================================================================
"""
Tests for the product catalog and its inventory sync.
"""

from unittest.mock import MagicMock

import pytest

from storefront.base.inventory import InventoryService
from storefront.catalog import DEFAULT_PRODUCTS, Catalog
from storefront.catalog.service import parse_stock
from storefront.core.exceptions import (
    InvalidStockError,
    InventorySyncError,
    ProductNotFoundError,
)
from storefront.infrastructure.inventory import InMemoryInventoryService


@pytest.fixture()
def inventory():
    return InMemoryInventoryService({p.name: p.stock for p in DEFAULT_PRODUCTS})


@pytest.fixture()
def catalog(inventory):
    return Catalog(inventory)


class TestLookup:
    """Tests for listing and looking up products."""

    def test_lists_default_products(self, catalog):
        products = catalog.list_products()
        assert [p.id for p in products] == [1, 2, 3, 4, 5, 6]

    def test_get_product(self, catalog):
        assert catalog.get_product(2).name == "Audio Interface Pro"

    def test_unknown_product(self, catalog):
        with pytest.raises(ProductNotFoundError) as exc_info:
            catalog.get_product(42)
        assert exc_info.value.product_id == 42
        assert "42" in str(exc_info.value)

    def test_catalog_copies_products(self, catalog):
        catalog.update_stock(1, 0)
        assert DEFAULT_PRODUCTS[0].stock == 15


class TestUpdateStock:
    """Tests for Catalog.update_stock()."""

    def test_updates_local_and_inventory(self, catalog, inventory):
        product = catalog.update_stock(1, 3)

        assert product.stock == 3
        assert catalog.get_product(1).stock == 3
        assert inventory.get_stock()["Studio Microphone XL5"] == 3

    def test_accepts_integer_string(self, catalog):
        assert catalog.update_stock(2, " 7 ").stock == 7

    @pytest.mark.parametrize("value", [-1, "abc", "1.5", 2.5, True, None, [3]])
    def test_rejects_invalid_values(self, catalog, value):
        with pytest.raises(InvalidStockError):
            catalog.update_stock(1, value)
        assert catalog.get_product(1).stock == 15

    def test_unknown_product(self, catalog):
        with pytest.raises(ProductNotFoundError):
            catalog.update_stock(99, 1)

    def test_inventory_failure_propagates_after_local_change(self):
        inventory = MagicMock(spec=InventoryService)
        inventory.update_stock.side_effect = InventorySyncError("down")
        catalog = Catalog(inventory)

        with pytest.raises(InventorySyncError):
            catalog.update_stock(1, 4)
        assert catalog.get_product(1).stock == 4

    def test_rejected_update_keeps_local_change(self):
        inventory = MagicMock(spec=InventoryService)
        inventory.update_stock.return_value = False
        catalog = Catalog(inventory)

        assert catalog.update_stock(1, 4).stock == 4


class TestSync:
    """Tests for Catalog.sync()."""

    def test_refreshes_stock(self, catalog, inventory):
        inventory.update_stock("Audio Interface Pro", 0)
        products = catalog.sync()

        assert products[1].stock == 0
        assert products[0].stock == 15

    def test_products_missing_from_inventory_keep_stock(self):
        catalog = Catalog(InMemoryInventoryService({"Digital Mixing Console": 1}))
        products = catalog.sync()
        assert [p.stock for p in products] == [15, 8, 10, 20, 1, 12]


class TestParseStock:
    """Tests for parse_stock()."""

    @pytest.mark.parametrize("value, expected", [(0, 0), (12, 12), ("5", 5), (3.0, 3)])
    def test_valid(self, value, expected):
        assert parse_stock(value) == expected
