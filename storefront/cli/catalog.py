# ==============================================================================
# Catalog Commands
# ==============================================================================
"""
Catalog commands for the storefront CLI.

Lists products and synchronizes stock with the configured inventory service.
"""

import json
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from storefront.catalog import DEFAULT_PRODUCTS, Catalog
from storefront.cli.shared import C, I, configure_logging
from storefront.core.exceptions import StorefrontError
from storefront.infrastructure.inventory import get_inventory_service


# ==============================================================================
# Helper Functions
# ==============================================================================


def _build_catalog() -> Catalog:
    configure_logging()
    seed = {p.name: p.stock for p in DEFAULT_PRODUCTS}
    return Catalog(get_inventory_service(seed))


def _print_products(products, json_output: bool) -> None:
    if json_output:
        print(json.dumps([p.model_dump() for p in products], indent=2))
        return

    table = Table(title="Products")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Stock", justify="right", style="green")
    for p in products:
        table.add_row(str(p.id), p.name, f"{p.price:,.2f}", f"{p.stock:,}")
    Console().print(table)


# ==============================================================================
# Commands
# ==============================================================================


def catalog_list(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List catalog products with their local stock levels."""
    _print_products(_build_catalog().list_products(), json_output)


def catalog_sync(
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Refresh stock levels from the inventory service."""
    try:
        products = _build_catalog().sync()
    except StorefrontError as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} Sync failed: {e}{C.RESET}")
        raise typer.Exit(1)
    _print_products(products, json_output)


def catalog_set_stock(
    product_id: Annotated[int, typer.Argument(help="Product ID")],
    stock: Annotated[str, typer.Argument(help="New stock level")],
) -> None:
    """Set a product's stock and push it to the inventory service."""
    try:
        product = _build_catalog().update_stock(product_id, stock)
    except StorefrontError as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} {e}{C.RESET}")
        raise typer.Exit(1)
    print(f"{C.BRIGHT_GREEN}{I.CHECK} {product.name}: {product.stock:,} in stock{C.RESET}")
