# ==============================================================================
# Storefront CLI
# ==============================================================================
"""
Command-line interface for the storefront backend.

Usage:
    storefront --help
    storefront analytics show
    storefront analytics sessions --min-conversions 2
    storefront analytics track '{"type": "pageView", "path": "/", "sessionId": "s1"}'
    storefront analytics report '{"sessionId": "s1", "insights": [...]}'
    storefront analytics ingest events.jsonl
    storefront catalog list
    storefront catalog sync
    storefront catalog set-stock 1 25
    storefront config show
"""

import os

import typer

# ==============================================================================
# App Configuration
# ==============================================================================
# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="storefront",
    help="Storefront backend: traffic analytics and catalog CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

analytics_app = typer.Typer(
    help="Traffic analytics operations",
    no_args_is_help=True,
)
app.add_typer(analytics_app, name="analytics")

# Register analytics commands from cli.analytics module
from storefront.cli.analytics import (
    analytics_ingest,
    analytics_report,
    analytics_sessions,
    analytics_show,
    analytics_track,
)

analytics_app.command("show")(analytics_show)
analytics_app.command("sessions")(analytics_sessions)
analytics_app.command("track")(analytics_track)
analytics_app.command("report")(analytics_report)
analytics_app.command("ingest")(analytics_ingest)

catalog_app = typer.Typer(
    help="Product catalog and inventory sync",
    no_args_is_help=True,
)
app.add_typer(catalog_app, name="catalog")

# Register catalog commands from cli.catalog module
from storefront.cli.catalog import catalog_list, catalog_set_stock, catalog_sync

catalog_app.command("list")(catalog_list)
catalog_app.command("sync")(catalog_sync)
catalog_app.command("set-stock")(catalog_set_stock)

config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Register config commands from cli.config module
from storefront.cli.config import config_show

config_app.command("show")(config_show)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
