"""upgradegraph CLI -- Upgrade graphs for operator catalogs.

Entry point for the ``upgradegraph`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    render   -- Draw the upgrade graph as Mermaid or Graphviz DOT.
    summary  -- Tabulate packages, channels, heads and edges.

Usage::

    upgradegraph render < catalog.txt
    upgradegraph render catalog.txt -p etcd -o etcd.mmd
    upgradegraph render catalog.txt --format dot | dot -Tsvg > graph.svg
    upgradegraph summary catalog.txt --json
"""

from __future__ import annotations

import logging

import click

from upgradegraph import __version__
from upgradegraph.cli.render_cmd import render_command
from upgradegraph.cli.summary_cmd import summary_command
from upgradegraph.logging_config import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug details.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Only log errors.")
def cli(verbose: bool, quiet: bool) -> None:
    """upgradegraph: Render operator catalog upgrade graphs.

    Reads flattened catalog rows (package|channel|bundle|depth|version|
    skipRange|replaces) and draws each package's channels with their
    replaces and skip-range upgrade edges.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    configure_logging(level=level, force=True)


# Register all subcommands
cli.add_command(render_command)
cli.add_command(summary_command)
