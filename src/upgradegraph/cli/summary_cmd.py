"""``upgradegraph summary [INPUT]`` -- Tabulate a catalog's upgrade graph.

Runs the same accumulate/resolve passes as ``render`` and prints per-package
counts (channels, bundles, heads, replaces and skip-range edges) plus the
bundles that were dropped for malformed versions or skip-ranges.

Exit Codes:
    0 -- Always.
"""

from __future__ import annotations

from typing import TextIO

import click

from upgradegraph.core.catalog import accumulate, resolve
from upgradegraph.core.summary import summarize


@click.command("summary")
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--package", "-p", default=None, help="Only summarize this package.")
@click.option(
    "--json", "output_json",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)
def summary_command(input_file: TextIO, package: str | None, output_json: bool) -> None:
    """Summarize the upgrade graph of the catalog rows in INPUT (default: stdin)."""
    catalog = accumulate(input_file, package=package)
    report = resolve(catalog)
    summaries = summarize(catalog)

    from upgradegraph.cli.output import print_catalog_summary, print_json

    if output_json:
        print_json({
            "packages": [s.as_dict() for s in summaries],
            "removed": [
                {"package": r.package, "bundle": r.name, "field": r.field, "value": r.value}
                for r in report.removed
            ],
        })
    else:
        print_catalog_summary(summaries, report.removed)
