"""``upgradegraph render [INPUT]`` -- Draw the upgrade graph of a catalog.

Reads pipe-delimited catalog rows (from INPUT or stdin), merges them into
packages and bundles, computes skip-range edges, and writes a Mermaid (or
Graphviz DOT) diagram to stdout or ``--output``.

Row format::

    package|channel|bundle|depth|version|skipRange|replaces

Exit Codes:
    0 -- Diagram written (possibly with warnings for dropped rows/bundles).
    1 -- Invalid configuration.
"""

from __future__ import annotations

import sys
from typing import TextIO

import click

from upgradegraph.config import FORMATS, load_config
from upgradegraph.core.catalog import accumulate, resolve
from upgradegraph.core.render import DIRECTIONS, get_renderer
from upgradegraph.exceptions import ConfigError


@click.command("render")
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--package", "-p",
    default=None,
    help="Only graph this package.",
)
@click.option(
    "--format", "-f", "fmt",
    type=click.Choice(FORMATS),
    default=None,
    help="Diagram format (default: mermaid).",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the diagram to a file instead of stdout.",
)
@click.option(
    "--installed",
    multiple=True,
    help="Mark a bundle as installed (repeatable).",
)
@click.option(
    "--markdown/--no-markdown",
    default=None,
    help="Wrap the diagram in a Markdown code fence.",
)
@click.option(
    "--direction",
    type=click.Choice(DIRECTIONS, case_sensitive=False),
    default=None,
    help="Layout direction (default: LR).",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with graph settings.",
)
def render_command(
    input_file: TextIO,
    package: str | None,
    fmt: str | None,
    output: str | None,
    installed: tuple[str, ...],
    markdown: bool | None,
    direction: str | None,
    config_path: str | None,
) -> None:
    """Render the upgrade graph of the catalog rows in INPUT (default: stdin).

    Bundles with a malformed version or skip-range are left out of the
    graph and reported as warnings on stderr.
    """
    try:
        config = load_config(config_path).with_overrides(
            format=fmt,
            package=package,
            installed=installed,
            markdown=markdown,
            direction=direction,
        )
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    catalog = accumulate(input_file, package=config.package)
    resolve(catalog)

    renderer = get_renderer(config.format, config.render)
    with click.open_file(output or "-", "w", encoding="utf-8") as sink:
        renderer.render(catalog, sink)

    if output:
        click.echo(f"Graph written to: {output}", err=True)
