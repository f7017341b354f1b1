"""Rich output formatting helpers for the upgradegraph CLI."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from upgradegraph.core.catalog import RemovedBundle
from upgradegraph.core.summary import PackageSummary

console = Console()


def print_catalog_summary(
    summaries: list[PackageSummary],
    removed: list[RemovedBundle],
) -> None:
    """Print one table row per package, then any bundles dropped from the graph.

    Args:
        summaries: Per-package summaries, already sorted.
        removed: Bundles the resolver dropped for malformed fields.
    """
    if not summaries:
        console.print("[dim]No packages found in the catalog.[/dim]")
    else:
        table = Table(title="Catalog Upgrade Graph", show_header=True, header_style="bold")
        table.add_column("Package", style="bold")
        table.add_column("Channels")
        table.add_column("Bundles", justify="right")
        table.add_column("Absent", justify="right")
        table.add_column("Heads")
        table.add_column("Replaces", justify="right")
        table.add_column("Skip-range", justify="right")
        for s in summaries:
            table.add_row(
                s.name,
                ", ".join(s.channels),
                str(s.bundles),
                str(s.absent) if s.absent else "-",
                ", ".join(s.heads) or "-",
                str(s.explicit_edges),
                str(s.implicit_edges),
            )
        console.print(table)

    if removed:
        dropped = Table(title="Dropped Bundles", show_header=True, header_style="bold")
        dropped.add_column("Package", style="bold")
        dropped.add_column("Bundle")
        dropped.add_column("Field")
        dropped.add_column("Value", style="red")
        for r in removed:
            dropped.add_row(r.package, r.name, r.field, r.value)
        console.print(dropped)

    total_bundles = sum(s.bundles for s in summaries)
    console.print(
        f"[bold]{len(summaries)}[/bold] packages | "
        f"[bold]{total_bundles}[/bold] bundles | "
        f"[red]{len(removed)} dropped[/red]"
    )


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout.

    Args:
        data: Any JSON-serializable data structure.
    """
    console.print_json(json.dumps(data, default=str))
