#!/usr/bin/env python3
"""
🔦 Lumina CLI - Trace your data lineage.

Usage:
    lumina graph                  List assets and their health
    lumina describe <id>          Show an asset's details and schema
    lumina impact <id>            Downstream impact of an asset
    lumina root-cause <id>        Upstream error path of a broken asset
    lumina incidents              Active incidents with root causes
    lumina ingest <type>...       Connect and sync catalog sources (mock)
    lumina ask "<question>"       Ask the assistant about the graph
    lumina --help                 Show help
"""

import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from lumina.graph import DataAsset, HealthStatus, downstream_closure, upstream_closure
from lumina.incidents import Severity, active_incidents
from lumina.ingestion import IntegrationType, SyncStatus
from lumina.view import GraphState, ModeSelected, NodeClicked, TimeTravelChanged, ViewMode
from lumina.workbench import Workbench

console = Console()

STATUS_STYLE = {
    HealthStatus.HEALTHY: "green",
    HealthStatus.WARNING: "yellow",
    HealthStatus.ERROR: "red",
}


def setup_logging(level: str) -> None:
    """Route library logs through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _status(asset: DataAsset) -> str:
    style = STATUS_STYLE[asset.status]
    return f"[{style}]{asset.status.value}[/{style}]"


def _bench(days: int = 0) -> Workbench:
    bench = Workbench.from_settings()
    if days:
        bench.dispatch(TimeTravelChanged(days))
    return bench


def _require(state: GraphState, node_id: str) -> DataAsset:
    asset = state.view.get(node_id)
    if asset is None:
        console.print(f"[red]Error:[/red] Unknown asset: {node_id}")
        sys.exit(1)
    return asset


def _asset_table(title: str, assets: list[DataAsset], highlighted: frozenset[str] | None = None) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Kind")
    table.add_column("Status")
    table.add_column("Quality", justify="right")
    table.add_column("Owner")

    for asset in assets:
        dim = highlighted is not None and asset.id not in highlighted
        table.add_row(
            asset.id,
            asset.label,
            asset.kind.value,
            _status(asset),
            str(asset.quality_score),
            asset.owner,
            style="dim" if dim else None,
        )
    return table


def show_graph(days: int = 0) -> None:
    """Print every asset and edge."""
    bench = _bench(days)
    view = bench.state.view
    label = bench.state.projector.label(bench.state.days_ago)

    console.print(_asset_table(f"🔦 Lineage graph ({label})", list(view.nodes)))
    console.print()
    for edge in view.edges:
        console.print(f"  [dim]{edge.id}[/dim] {edge.source} → {edge.target}")


def describe(node_id: str, days: int = 0) -> None:
    """Print one asset's metadata and schema."""
    bench = _bench(days)
    asset = _require(bench.state, node_id)
    view = bench.state.view

    lines = [
        f"[bold]{asset.label}[/bold] ({asset.kind.value})",
        f"Status: {_status(asset)}   Quality: {asset.quality_score}/100",
        f"Owner: {asset.owner or '-'}",
        f"Freshness: {asset.freshness or '-'}   Last updated: {asset.last_updated or '-'}",
    ]
    if asset.row_count is not None:
        lines.append(f"Rows: {asset.row_count:,}")
    if asset.tags:
        lines.append(f"Tags: {', '.join(asset.tags)}")
    if asset.description:
        lines.append("")
        lines.append(asset.description)
    upstream = view.predecessors(asset.id)
    downstream = view.successors(asset.id)
    lines.append("")
    lines.append(f"Upstream: {', '.join(upstream) or '-'}")
    lines.append(f"Downstream: {', '.join(downstream) or '-'}")
    lines.append(
        f"Lineage: {len(upstream_closure(asset.id, view.edges)) - 1} upstream, "
        f"{len(downstream_closure(asset.id, view.edges)) - 1} downstream asset(s)"
    )

    console.print(Panel("\n".join(lines), title=f"📋 {asset.id}", border_style="cyan"))

    if asset.columns:
        schema = Table(title="Schema")
        schema.add_column("Column", style="cyan")
        schema.add_column("Type")
        schema.add_column("PII")
        schema.add_column("Description")
        for col in asset.columns:
            schema.add_row(
                col.name, col.type, "[red]yes[/red]" if col.is_pii else "no", col.description
            )
        console.print(schema)


def trace(node_id: str, mode: ViewMode, days: int = 0) -> None:
    """Print the highlight set of a click in ``mode``."""
    bench = _bench(days)
    _require(bench.state, node_id)
    bench.dispatch(ModeSelected(mode))
    state = bench.dispatch(NodeClicked(node_id))

    if mode is ViewMode.IMPACT_ANALYSIS:
        title = f"💥 Downstream impact of {node_id}"
    else:
        title = f"🔍 Root cause path of {node_id}"

    if not state.highlighted:
        console.print(f"[green]✓[/green] {node_id} is healthy: no error path")
        return

    in_path = [n for n in state.view.nodes if n.id in state.highlighted]
    console.print(_asset_table(title, in_path))
    console.print(f"\n{len(in_path)} of {len(state.view)} asset(s) highlighted")


def show_incidents(days: int = 0) -> None:
    """Print active incidents."""
    bench = _bench(days)
    incidents = active_incidents(bench.state.view)

    if not incidents:
        console.print("[green]✓[/green] No active incidents")
        return

    table = Table(title="🚨 Active incidents")
    table.add_column("Severity")
    table.add_column("Asset", style="cyan")
    table.add_column("Owner")
    table.add_column("Root cause")
    table.add_column("Impacted", justify="right")

    for incident in incidents:
        style = "bold red" if incident.severity is Severity.CRITICAL else "yellow"
        table.add_row(
            f"[{style}]{incident.severity.value}[/{style}]",
            incident.node_id,
            incident.owner,
            "itself" if incident.is_origin else ", ".join(incident.root_causes),
            str(incident.impacted),
        )
    console.print(table)


async def _ingest(types: list[IntegrationType]) -> Workbench:
    bench = _bench()
    for type in types:
        source = await bench.connect(type)
        if source is None:
            console.print(f"[red]❌ {type.value}[/red] connection refused")
            continue

        with console.status(f"Syncing [cyan]{source.name}[/cyan]..."):
            outcome = await bench.sync(source.id)

        if outcome.status is SyncStatus.FAILED:
            console.print(f"[red]❌ {source.name}[/red] {outcome.error}")
        elif outcome.status is SyncStatus.REJECTED:
            console.print(f"[yellow]⏳ {source.name}[/yellow] {outcome.error}")
        else:
            summary = outcome.result.summary if outcome.result else ""
            console.print(
                f"[green]✓[/green] {source.name}: {summary} "
                f"(+{len(outcome.added_nodes)} asset(s), +{len(outcome.added_edges)} edge(s)"
                + (f", {len(outcome.dropped_edges)} dangling dropped" if outcome.dropped_edges else "")
                + ")"
            )
    return bench


def ingest(type_names: list[str]) -> None:
    """Connect and sync sources in order, then print the merged graph size."""
    types = [IntegrationType(name.upper()) for name in type_names]
    bench = asyncio.run(_ingest(types))
    live = bench.state.live
    console.print(f"\nGraph now has {len(live)} asset(s) and {len(live.edges)} edge(s)")


def ask(query: str, selected: str | None = None) -> None:
    """Ask the assistant one question."""
    bench = _bench()
    if selected:
        _require(bench.state, selected)
        bench.dispatch(NodeClicked(selected))

    with console.status("Thinking..."):
        reply = asyncio.run(bench.ask(query))

    console.print(Panel(reply or "", title="🤖 Lumina AI", border_style="magenta"))


def main() -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="lumina",
        description="🔦 Lumina - Data lineage observability",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  lumina graph                        List all assets
  lumina graph --days 3               The graph as it looked 3 days ago
  lumina impact stg_orders            What breaks if stg_orders breaks
  lumina root-cause dash_mkt          Why is the marketing dashboard red
  lumina ingest snowflake dbt tableau Crawl the mock catalogs in order
  lumina ask "What feeds dash_exec?"  Ask the assistant
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: LUMINA_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    days_parent = argparse.ArgumentParser(add_help=False)
    days_parent.add_argument(
        "--days", "-d", type=int, default=0, help="Time travel offset in days (0-5)"
    )

    subparsers.add_parser("graph", parents=[days_parent], help="List assets")

    describe_parser = subparsers.add_parser(
        "describe", parents=[days_parent], help="Show asset details"
    )
    describe_parser.add_argument("node_id", help="Asset id (e.g., stg_orders)")

    impact_parser = subparsers.add_parser(
        "impact", parents=[days_parent], help="Downstream impact analysis"
    )
    impact_parser.add_argument("node_id", help="Asset id")

    root_parser = subparsers.add_parser(
        "root-cause", parents=[days_parent], help="Upstream root cause analysis"
    )
    root_parser.add_argument("node_id", help="Asset id")

    subparsers.add_parser("incidents", parents=[days_parent], help="Active incidents")

    ingest_parser = subparsers.add_parser("ingest", help="Connect and sync sources")
    ingest_parser.add_argument(
        "types",
        nargs="+",
        type=str.upper,
        choices=[t.value for t in IntegrationType],
        help="Source types to crawl, in order",
    )

    ask_parser = subparsers.add_parser("ask", help="Ask the assistant")
    ask_parser.add_argument("query", help="Question about the graph")
    ask_parser.add_argument("--node", "-n", help="Select this asset first")

    # version
    parser.add_argument("--version", action="version", version="%(prog)s 0.3.0")

    args = parser.parse_args()

    from lumina.config import get_settings

    setup_logging(args.log_level or get_settings().log_level)

    if args.command == "graph":
        show_graph(args.days)
    elif args.command == "describe":
        describe(args.node_id, args.days)
    elif args.command == "impact":
        trace(args.node_id, ViewMode.IMPACT_ANALYSIS, args.days)
    elif args.command == "root-cause":
        trace(args.node_id, ViewMode.ROOT_CAUSE, args.days)
    elif args.command == "incidents":
        show_incidents(args.days)
    elif args.command == "ingest":
        ingest(args.types)
    elif args.command == "ask":
        ask(args.query, args.node)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
