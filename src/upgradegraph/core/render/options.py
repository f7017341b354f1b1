"""Rendering options shared by the diagram renderers."""

from __future__ import annotations

from dataclasses import dataclass

from upgradegraph.core.catalog.model import Bundle

DIRECTIONS: tuple[str, ...] = ("LR", "RL", "TB", "TD", "BT")

HEAD_CLASS = "head"
INSTALLED_CLASS = "installed"


@dataclass(frozen=True)
class RenderOptions:
    """Presentation settings for a rendered graph.

    Attributes:
        direction: Layout direction (``LR``, ``RL``, ``TB``, ``TD``, ``BT``).
        head_style: Style applied to channel-head nodes.
        installed_style: Style applied to installed bundles.
        installed: Bundle names to mark as installed.
        markdown: Wrap Mermaid output in a Markdown code fence.
    """

    direction: str = "LR"
    head_style: str = "fill:#ffbfcf"
    installed_style: str = "fill:#34ebba"
    installed: frozenset[str] = frozenset()
    markdown: bool = False

    def node_class(self, bundle: Bundle) -> str | None:
        """Style class of *bundle* as an edge source or bare node.

        Installed wins over head; most bundles get no class.
        """
        if bundle.name in self.installed:
            return INSTALLED_CLASS
        if bundle.is_head:
            return HEAD_CLASS
        return None
