"""Catalog accumulation, version ranges, and upgrade-edge resolution.

The pipeline is three sequential passes over an in-memory catalog::

    rows --accumulate()--> Catalog --resolve()--> Catalog --render--> text

All public names are re-exported here so callers can write
``from upgradegraph.core.catalog import accumulate, resolve``.
"""

from upgradegraph.core.catalog.accumulator import accumulate, add_entry
from upgradegraph.core.catalog.constraints import (
    VersionRange,
    matches,
    parse_range,
    parse_version,
)
from upgradegraph.core.catalog.model import (
    FIELD_DELIMITER,
    PLACEHOLDER_VERSION,
    Bundle,
    Catalog,
    CatalogEntry,
    Package,
    parse_depth,
)
from upgradegraph.core.catalog.resolver import (
    RemovedBundle,
    ResolutionReport,
    resolve,
)

__all__ = [
    "FIELD_DELIMITER",
    "PLACEHOLDER_VERSION",
    "Bundle",
    "Catalog",
    "CatalogEntry",
    "Package",
    "RemovedBundle",
    "ResolutionReport",
    "VersionRange",
    "accumulate",
    "add_entry",
    "matches",
    "parse_depth",
    "parse_range",
    "parse_version",
    "resolve",
]
