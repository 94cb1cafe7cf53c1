# ==============================================================================
# Product Catalog
# ==============================================================================
"""
Product catalog with inventory sync.
"""

from storefront.catalog.products import DEFAULT_PRODUCTS
from storefront.catalog.service import Catalog, parse_stock

__all__ = [
    "DEFAULT_PRODUCTS",
    "Catalog",
    "parse_stock",
]
