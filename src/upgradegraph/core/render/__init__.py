"""Diagram renderers for resolved catalogs.

Renderers write to an injected text sink (anything with ``write``), so they
can target stdout, a file, or an in-memory buffer alike.
"""

from __future__ import annotations

import io

from upgradegraph.core.catalog.model import Catalog
from upgradegraph.core.render.dot import DotRenderer
from upgradegraph.core.render.mermaid import (
    MermaidRenderer,
    mermaid_block,
    mermaid_id,
    mermaid_text,
)
from upgradegraph.core.render.options import DIRECTIONS, RenderOptions

RENDERERS: dict[str, type[MermaidRenderer] | type[DotRenderer]] = {
    "mermaid": MermaidRenderer,
    "dot": DotRenderer,
}


def get_renderer(fmt: str, options: RenderOptions | None = None) -> MermaidRenderer | DotRenderer:
    """Return a renderer for *fmt* (``"mermaid"`` or ``"dot"``).

    Raises:
        ValueError: If *fmt* is not a known format.
    """
    try:
        renderer_cls = RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown output format: {fmt!r}") from None
    return renderer_cls(options)


def render_to_string(
    catalog: Catalog,
    fmt: str = "mermaid",
    options: RenderOptions | None = None,
) -> str:
    """Render *catalog* into a string."""
    buf = io.StringIO()
    get_renderer(fmt, options).render(catalog, buf)
    return buf.getvalue()


__all__ = [
    "DIRECTIONS",
    "RENDERERS",
    "DotRenderer",
    "MermaidRenderer",
    "RenderOptions",
    "get_renderer",
    "mermaid_block",
    "mermaid_id",
    "mermaid_text",
    "render_to_string",
]
