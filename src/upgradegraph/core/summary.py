"""Per-package statistics over a resolved catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from upgradegraph.core.catalog.model import Catalog


@dataclass
class PackageSummary:
    """Counts describing one package's upgrade graph."""

    name: str
    channels: list[str] = field(default_factory=list)
    bundles: int = 0
    absent: int = 0
    heads: list[str] = field(default_factory=list)
    explicit_edges: int = 0
    implicit_edges: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "channels": list(self.channels),
            "bundles": self.bundles,
            "absent": self.absent,
            "heads": list(self.heads),
            "explicit_edges": self.explicit_edges,
            "implicit_edges": self.implicit_edges,
        }


def summarize(catalog: Catalog) -> list[PackageSummary]:
    """Summarize every package in *catalog*, sorted by package name.

    Implicit edges are counted after de-duplication against explicit ones,
    matching what the renderers draw.
    """
    summaries: list[PackageSummary] = []
    for pkg in catalog.packages():
        bundles = catalog.bundles(pkg.name)
        summaries.append(
            PackageSummary(
                name=pkg.name,
                channels=catalog.channels(pkg.name),
                bundles=len(bundles),
                absent=sum(1 for b in bundles if not b.present),
                heads=[b.name for b in bundles if b.is_head],
                explicit_edges=sum(len(b.replaces) for b in bundles),
                implicit_edges=sum(len(b.implicit_replaces()) for b in bundles),
            )
        )
    return summaries
