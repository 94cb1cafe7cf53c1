# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the storefront CLI.
"""

import json
from typing import Annotated

import typer

from storefront.cli.shared import C
from storefront.utils.config import get_settings
from storefront.utils.versions import get_storefront_version


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration."""
    settings = get_settings()
    analytics = settings.analytics
    inventory = settings.inventory

    if json_output:
        config = {
            "analytics": {
                "traffic_file": str(analytics.traffic_path),
                "insights_file": str(analytics.insights_path),
                "max_events": analytics.max_events,
                "max_insights": analytics.max_insights,
                "bucket_caps": {
                    "today": analytics.today_cap,
                    "lastWeek": analytics.week_cap,
                    "lastMonth": analytics.month_cap,
                },
                "flush_every": analytics.flush_every,
                "flush_interval_seconds": analytics.flush_interval_seconds,
            },
            "inventory": {
                "backend": "tally" if inventory.enabled else "memory",
                "url": inventory.url,
                "company_name": inventory.company_name,
                "timeout_seconds": inventory.timeout_seconds,
            },
            "version": get_storefront_version(),
            "log_level": settings.log_level,
            "debug": settings.debug,
        }
        print(json.dumps(config, indent=2))
        return

    # Human-readable output
    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    print(f"{C.CYAN}Analytics{C.RESET}")
    print(f"  Traffic:    {C.WHITE}{analytics.traffic_path}{C.RESET}")
    print(f"  Insights:   {C.WHITE}{analytics.insights_path}{C.RESET}")
    print(f"  Max Events: {C.WHITE}{analytics.max_events:,}{C.RESET}")
    print(f"  Max Insights: {C.WHITE}{analytics.max_insights:,}{C.RESET}")
    print(
        f"  Buckets:    {C.WHITE}today {analytics.today_cap:,} / week {analytics.week_cap:,}"
        f" / month {analytics.month_cap:,}{C.RESET}"
    )
    print(
        f"  Flush:      {C.WHITE}every {analytics.flush_every} events,"
        f" every {analytics.flush_interval_seconds}s{C.RESET}"
    )
    print()

    print(f"{C.CYAN}Inventory{C.RESET}")
    backend = "Tally ERP" if inventory.enabled else "in-memory"
    print(f"  Backend:    {C.WHITE}{backend}{C.RESET}")
    if inventory.enabled:
        print(f"  URL:        {C.WHITE}{inventory.url}{C.RESET}")
        print(f"  Company:    {C.WHITE}{inventory.company_name or '(current)'}{C.RESET}")
        print(f"  Timeout:    {C.WHITE}{inventory.timeout_seconds}s{C.RESET}")
    print()

    print(f"{C.CYAN}General{C.RESET}")
    print(f"  Version:    {C.WHITE}{get_storefront_version()}{C.RESET}")
    print(f"  Log Level:  {C.WHITE}{settings.log_level}{C.RESET}")
    print(f"  Debug:      {C.WHITE}{settings.debug}{C.RESET}")
    print()
