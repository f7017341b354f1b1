"""Mermaid flowchart rendering of a resolved catalog.

Output layout::

    flowchart LR
      classDef head fill:#ffbfcf;
      classDef installed fill:#34ebba;
      subgraph pkgA["pkgA"]
        subgraph pkgA__stable["stable channel"]
          pkgA__stable__bundle_2d_v1(1.0.0):::head
          pkgA__stable__bundle_2d_v2(0.9.0) -.->|"<1.0.0"| pkgA__stable__bundle_2d_v1(1.0.0)
        end
      end

Packages, channels, bundles and edge targets are all emitted in sorted
order, so the same catalog always renders to the same text.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TextIO

from upgradegraph.core.catalog.model import PLACEHOLDER_VERSION, Bundle, Catalog
from upgradegraph.core.render.options import HEAD_CLASS, INSTALLED_CLASS, RenderOptions

_INDENT1 = "  "
_INDENT2 = "    "
_INDENT3 = "      "

# Mermaid node/subgraph ids must be alphanumeric/underscore and must not start
# with a digit. Every other character, "_" included, is written as "_<hex>_",
# and parts are joined with "__", which no escape can start with. Distinct
# names therefore never share an id.
_ID_SAFE_RE = re.compile(r"[A-Za-z0-9]")
_ID_SEPARATOR = "__"


def _escape_id_char(char: str) -> str:
    return f"_{ord(char):x}_"


def _escape_id_part(part: str) -> str:
    return "".join(c if _ID_SAFE_RE.fullmatch(c) else _escape_id_char(c) for c in part)


def mermaid_id(*parts: str) -> str:
    """Build a Mermaid-safe identifier from name parts.

    The encoding is reversible, so two different part tuples always give
    two different identifiers.
    """
    ident = _ID_SEPARATOR.join(_escape_id_part(part) for part in parts)
    if not ident:
        return "_"
    if ident[0].isdigit():
        ident = _escape_id_char(ident[0]) + ident[1:]
    return ident


def mermaid_text(text: str) -> str:
    """Escape text for use inside a quoted Mermaid label."""
    return " ".join(text.split()).replace('"', "#quot;")


def mermaid_block(code: str) -> str:
    """Wrap Mermaid source in a Markdown Mermaid code fence."""
    return "```mermaid\n" + code.rstrip() + "\n```\n"


class MermaidRenderer:
    """Render a resolved ``Catalog`` as a Mermaid flowchart.

    Usage::

        renderer = MermaidRenderer(RenderOptions(direction="TB"))
        renderer.render(catalog, sys.stdout)
    """

    def __init__(self, options: RenderOptions | None = None) -> None:
        self._options = options or RenderOptions()

    def render(self, catalog: Catalog, sink: TextIO) -> None:
        """Write the diagram for *catalog* to *sink*."""
        text = "\n".join(self.lines(catalog)) + "\n"
        if self._options.markdown:
            text = mermaid_block(text)
        sink.write(text)

    def lines(self, catalog: Catalog) -> Iterator[str]:
        """Yield the diagram line by line, without terminators."""
        opts = self._options
        yield f"flowchart {opts.direction}"
        yield f"{_INDENT1}classDef {HEAD_CLASS} {opts.head_style};"
        yield f"{_INDENT1}classDef {INSTALLED_CLASS} {opts.installed_style};"

        for pkg in catalog.packages():
            yield f'{_INDENT1}subgraph {mermaid_id(pkg.name)}["{mermaid_text(pkg.name)}"]'
            for channel in catalog.channels(pkg.name):
                yield (
                    f"{_INDENT2}subgraph {mermaid_id(pkg.name, channel)}"
                    f'["{mermaid_text(channel)} channel"]'
                )
                for bundle in catalog.channel_bundles(pkg.name, channel):
                    for line in self._bundle_lines(catalog, bundle, channel):
                        yield _INDENT3 + line
                yield f"{_INDENT2}end"
            yield f"{_INDENT1}end"

    def _bundle_lines(self, catalog: Catalog, bundle: Bundle, channel: str) -> Iterator[str]:
        source = self._node(bundle.package, channel, bundle.name, bundle.version)
        node_class = self._options.node_class(bundle)
        if node_class:
            source += f":::{node_class}"

        if not bundle.has_edges:
            yield source
            return

        for target in sorted(bundle.replaces):
            yield f"{source} --> {self._target(catalog, bundle, channel, target)}"
        label = mermaid_text(bundle.skip_range)
        for target in bundle.implicit_replaces():
            yield f'{source} -.->|"{label}"| {self._target(catalog, bundle, channel, target)}'

    def _target(self, catalog: Catalog, source: Bundle, channel: str, name: str) -> str:
        # Targets that were never observed still get a node, labelled with
        # the placeholder version.
        target = catalog.bundle(source.package, name)
        version = target.version if target is not None else PLACEHOLDER_VERSION
        return self._node(source.package, channel, name, version)

    @staticmethod
    def _node(package: str, channel: str, name: str, version: str) -> str:
        return f"{mermaid_id(package, channel, name)}({version})"
