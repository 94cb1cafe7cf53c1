# ==============================================================================
# Storefront Exceptions
# ==============================================================================
"""
Exception hierarchy for the storefront backend.

Analytics ingest and persistence never raise for malformed data or disk
errors; these exceptions cover the catalog and the inventory collaborator,
where failures must reach the caller.
"""


class StorefrontError(Exception):
    """Base class for all storefront errors."""


class ProductNotFoundError(StorefrontError):
    """Raised when a product id is not in the catalog."""

    def __init__(self, product_id: int):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class InvalidStockError(StorefrontError):
    """Raised when a stock value is not a non-negative integer."""


class InventorySyncError(StorefrontError):
    """Raised when the inventory service cannot be reached or rejects a request."""
