"""Graphviz DOT rendering of a resolved catalog.

One ``cluster_<package>`` subgraph per package. Each bundle is a single
record node listing its version and channels, so a bundle shared by several
channels appears once here (unlike the Mermaid view, which draws one node
per channel). Absent bundles are dashed, heads get a thick pen, installed
bundles are filled. Explicit replaces edges are solid; skip-range edges are
dashed and suppressed when an explicit edge already covers the pair. With
``markdown`` set the digraph is wrapped in a Markdown ``dot`` code fence.

The DOT text is produced directly rather than through a Graphviz binding, so
rendering needs no native library.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import TextIO

from upgradegraph.core.catalog.model import Bundle, Catalog
from upgradegraph.core.render.mermaid import mermaid_id
from upgradegraph.core.render.options import RenderOptions

_RECORD_SPECIAL_RE = re.compile(r'([{}|<>"\\])')

_HEAD_PENWIDTH = 4
_NODE_WIDTH = 4


def dot_quote(text: str) -> str:
    """Quote *text* as a DOT string literal."""
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def dot_block(code: str) -> str:
    """Wrap DOT source in a Markdown ``dot`` code fence."""
    return "```dot\n" + code.rstrip() + "\n```\n"


def _record_text(text: str) -> str:
    return _RECORD_SPECIAL_RE.sub(r"\\\1", text)


def _style_value(style: str) -> str:
    """Pull the colour out of a Mermaid-style ``fill:#rrggbb`` declaration."""
    for part in style.split(","):
        key, _, value = part.partition(":")
        if key.strip() == "fill" and value.strip():
            return value.strip()
    return style


class DotRenderer:
    """Render a resolved ``Catalog`` as a Graphviz digraph."""

    def __init__(self, options: RenderOptions | None = None) -> None:
        self._options = options or RenderOptions()

    def render(self, catalog: Catalog, sink: TextIO) -> None:
        text = "\n".join(self.lines(catalog)) + "\n"
        if self._options.markdown:
            text = dot_block(text)
        sink.write(text)

    def lines(self, catalog: Catalog) -> Iterator[str]:
        yield "digraph upgrades {"
        rankdir = "TB" if self._options.direction == "TD" else self._options.direction
        yield f"  rankdir={rankdir};"
        for pkg in catalog.packages():
            yield f"  subgraph {dot_quote('cluster_' + pkg.name)} {{"
            yield f"    label={dot_quote('package: ' + pkg.name)};"
            bundles = catalog.bundles(pkg.name)
            for bundle in bundles:
                yield "    " + self._node(bundle)
            for bundle in bundles:
                for line in self._edges(bundle):
                    yield "    " + line
            yield "  }"
        yield "}"

    def _node(self, bundle: Bundle) -> str:
        channels = "|".join(_record_text(c) for c in sorted(bundle.channels))
        label = (
            f"{{{_record_text(bundle.name)}|{_record_text(bundle.version)}"
            f"|{{channels|{{{channels}}}}}}}"
        )
        attrs = [
            "shape=record",
            f"width={_NODE_WIDTH}",
            # Record fields are already escaped, including quotes.
            f"label=\"{label}\"",
        ]
        styles: list[str] = []
        if not bundle.present:
            styles.append("dashed")
        if bundle.name in self._options.installed:
            styles.append("filled")
            attrs.append(f"fillcolor={dot_quote(_style_value(self._options.installed_style))}")
        if styles:
            attrs.append(f"style={dot_quote(','.join(styles))}")
        if bundle.is_head:
            attrs.append(f"penwidth={_HEAD_PENWIDTH}")
        return f"{_node_id(bundle.package, bundle.name)} [{', '.join(attrs)}];"

    @staticmethod
    def _edges(bundle: Bundle) -> Iterator[str]:
        source = _node_id(bundle.package, bundle.name)
        for target in sorted(bundle.replaces):
            yield f"{source} -> {_node_id(bundle.package, target)};"
        for target in bundle.implicit_replaces():
            yield (
                f"{source} -> {_node_id(bundle.package, target)} "
                f"[style=dashed, label={dot_quote(bundle.skip_range)}];"
            )


def _node_id(package: str, name: str) -> str:
    # Node ids are global to the digraph, not scoped to a cluster.
    return dot_quote(mermaid_id(package, name))
