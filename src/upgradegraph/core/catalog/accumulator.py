"""Fold catalog rows into a ``Catalog``.

Each row names one bundle in one channel. The same bundle usually appears
many times (once per channel, once per replaces edge); every observation is
merged into a single ``Bundle`` record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from upgradegraph.core.catalog.model import FIELD_DELIMITER, Catalog, CatalogEntry
from upgradegraph.exceptions import ParseError

logger = logging.getLogger(__name__)


def add_entry(catalog: Catalog, entry: CatalogEntry) -> None:
    """Merge one entry into *catalog*, creating package and bundle on first sight."""
    bundle, _ = catalog.get_or_create_bundle(entry)
    bundle.merge(entry)


def accumulate(
    rows: Iterable[str],
    package: str | None = None,
    delimiter: str = FIELD_DELIMITER,
    catalog: Catalog | None = None,
) -> Catalog:
    """Build a catalog from delimited rows.

    Blank rows are ignored. Rows with the wrong number of fields are skipped
    with a warning. When *package* is given, rows for any other package are
    skipped without touching the catalog.

    Args:
        rows: Text rows, with or without trailing line terminators.
        package: Optional package-name filter.
        delimiter: Field delimiter.
        catalog: Existing catalog to fold into; a new one is created if None.

    Returns:
        The populated catalog.
    """
    if catalog is None:
        catalog = Catalog()

    for lineno, raw in enumerate(rows, start=1):
        row = raw.rstrip("\r\n")
        if not row.strip():
            continue
        try:
            entry = CatalogEntry.from_row(row, delimiter)
        except ParseError as exc:
            logger.warning("Skipping row %d: %s", lineno, exc)
            continue
        if package is not None and entry.package != package:
            continue
        add_entry(catalog, entry)

    return catalog
