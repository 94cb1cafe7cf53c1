# ==============================================================================
# Analytics Commands
# ==============================================================================
"""
Analytics commands for the storefront CLI.

Reads and writes the persisted traffic and insights files: shows the admin
dashboard, lists converting sessions, and ingests events or insight batches.
"""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from storefront.analytics import PersistenceScheduler
from storefront.cli.shared import (
    BOX_WIDTH,
    C,
    I,
    _box_bottom,
    _box_header,
    _box_line,
    _empty_line,
    _section_header,
    load_analytics,
)
from storefront.utils.config import get_settings


# ==============================================================================
# Helper Functions
# ==============================================================================


def _parse_json_object(raw: str, what: str) -> dict:
    """Parse a JSON object argument, exiting with an error message if invalid."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} Invalid {what} JSON: {e}{C.RESET}", file=sys.stderr)
        raise typer.Exit(1)
    if not isinstance(value, dict):
        print(f"{C.BRIGHT_RED}{I.CROSS} {what} must be a JSON object{C.RESET}", file=sys.stderr)
        raise typer.Exit(1)
    return value


def _window_row(label: str, values: dict, fmt: str = ",") -> str:
    return (
        f"  {label:<26}{values['today']:>10{fmt}}  "
        f"{values['weekly']:>10{fmt}}  {values['monthly']:>10{fmt}}"
    )


# ==============================================================================
# Commands
# ==============================================================================


def analytics_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output as JSON for scripting")
    ] = False,
) -> None:
    """Show the admin dashboard.

    Displays traffic, conversions, top products, device distribution and
    high-priority insights computed from the persisted traffic files.

    Examples:
        storefront analytics show          # Formatted output
        storefront analytics show --json   # JSON output for scripting
    """
    dashboard = load_analytics().get_dashboard().model_dump(by_alias=True)

    if json_output:
        print(json.dumps(dashboard, indent=2, default=str))
        return

    W = BOX_WIDTH
    INNER = W - 2
    traffic = dashboard["traffic"]
    conversions = dashboard["conversions"]

    print()
    print(_box_header("STOREFRONT ANALYTICS", W))
    print(_empty_line(W))

    header = f"  {'':26}{'Today':>10}  {'Weekly':>10}  {'Monthly':>10}"
    print(_box_line(header, W))
    sep = "  " + "─" * (INNER - 4)
    print(_box_line(sep, W))
    print(_box_line(_window_row("Unique Page Views", traffic["pageViews"]), W))
    print(_box_line(_window_row("Sessions", traffic["sessions"]), W))
    print(_box_line(_window_row("Add to Cart", conversions["conversions"]), W))
    print(_box_line(_window_row("Conversion Rate %", conversions["rates"], ".2f"), W))
    print(_empty_line(W))

    print(_section_header("Top Products", W))
    if not dashboard["topProducts"]:
        print(_box_line(f"  {C.DIM}No product interactions yet{C.RESET}", W))
    for product in dashboard["topProducts"]:
        name = str(product["name"])[:36]
        row = f"  {name:<36}{product['views']:>8,} views  {product['cartAdds']:>6,} adds"
        print(_box_line(row, W))

    print(_section_header("Devices", W))
    counts = dashboard["deviceStats"]["counts"]
    percentages = dashboard["deviceStats"]["percentages"]
    for device in ("desktop", "mobile", "unknown"):
        row = f"  {device.title():<26}{counts[device]:>10,}  {percentages[device]:>9.1f}%"
        print(_box_line(row, W))

    print(_section_header("High Priority Insights", W))
    if not dashboard["insights"]:
        print(_box_line(f"  {C.DIM}No high priority insights{C.RESET}", W))
    for insight in dashboard["insights"]:
        text = str(insight.get("message") or insight.get("title") or insight.get("type", ""))
        print(_box_line(f"  {C.BRIGHT_YELLOW}{I.WARN}{C.RESET} {text[: INNER - 6]}", W))

    print(_empty_line(W))
    print(_box_bottom(W))
    print()


def analytics_sessions(
    min_conversions: Annotated[
        int, typer.Option("--min-conversions", "-m", help="Minimum conversions per session")
    ] = 1,
    json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """List sessions with at least N conversions.

    Examples:
        storefront analytics sessions
        storefront analytics sessions --min-conversions 3 --json
    """
    sessions = load_analytics().get_converting_sessions(min_conversions)

    if json_output:
        rows = [
            s.model_dump(by_alias=True, exclude={"events"}) | {"eventCount": s.event_count}
            for s in sessions
        ]
        print(json.dumps(rows, indent=2, default=str))
        return

    table = Table(title=f"Sessions with ≥ {min_conversions} conversions")
    table.add_column("Session", style="cyan")
    table.add_column("Events", justify="right")
    table.add_column("Page Views", justify="right")
    table.add_column("Conversions", justify="right", style="green")
    table.add_column("First Seen")
    table.add_column("Last Seen")
    for s in sessions:
        table.add_row(
            str(s.session_id),
            f"{s.event_count:,}",
            f"{s.page_views:,}",
            f"{s.conversions:,}",
            str(s.first_seen or ""),
            str(s.last_seen or ""),
        )
    Console().print(table)


def analytics_track(
    event: Annotated[str, typer.Argument(help="Event as a JSON object")],
) -> None:
    """Record one tracking event and flush the traffic file.

    Examples:
        storefront analytics track '{"type": "pageView", "path": "/", "sessionId": "s1"}'
    """
    payload = _parse_json_object(event, "event")
    analytics = load_analytics()
    analytics.track_event(payload)
    if not analytics.flush_events():
        raise typer.Exit(1)
    print(f"{C.BRIGHT_GREEN}{I.CHECK} Event recorded ({len(analytics):,} stored){C.RESET}")


def analytics_report(
    batch: Annotated[
        str,
        typer.Argument(help='Insight batch as JSON: {"sessionId", "timestamp", "insights": [...]}'),
    ],
) -> None:
    """Store a batch of insights.

    Examples:
        storefront analytics report '{"sessionId": "s1", "insights": [{"priority": "high"}]}'
    """
    payload = _parse_json_object(batch, "insight batch")
    if not isinstance(payload.get("insights"), list):
        print(f"{C.BRIGHT_YELLOW}{I.WARN} No insights list in batch, nothing stored{C.RESET}")
        return
    analytics = load_analytics()
    analytics.save_insights(payload)
    print(f"{C.BRIGHT_GREEN}{I.CHECK} Insights stored ({len(analytics.get_insights()):,} total){C.RESET}")


def analytics_ingest(
    source: Annotated[
        Path, typer.Argument(help="JSON Lines file of events ('-' for stdin)")
    ] = Path("-"),
) -> None:
    """Ingest tracking events from a JSON Lines file.

    The periodic flush runs while ingesting, and both files are flushed
    once more at the end. Lines that are not JSON objects are skipped.

    Examples:
        storefront analytics ingest events.jsonl
        cat events.jsonl | storefront analytics ingest
    """
    analytics = load_analytics()
    scheduler = PersistenceScheduler(
        analytics, interval_seconds=get_settings().analytics.flush_interval_seconds
    )

    ingested = skipped = 0
    stream = sys.stdin if str(source) == "-" else source.open("r", encoding="utf-8")
    scheduler.start()
    try:
        for line in stream:
            line = line.strip()
            if not line:
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                skipped += 1
                continue
            if not isinstance(event, dict):
                skipped += 1
                continue
            analytics.track_event(event)
            ingested += 1
    finally:
        scheduler.shutdown()
        if stream is not sys.stdin:
            stream.close()

    print(f"{C.BRIGHT_GREEN}{I.CHECK} Ingested {ingested:,} events{C.RESET}", end="")
    print(f" {C.DIM}({skipped:,} skipped){C.RESET}" if skipped else "")
