"""Catalog data model: entries, bundles, packages, and the bundle arena.

A ``Catalog`` owns every ``Bundle`` in a flat arena indexed by a stable
integer id. Each ``Package`` keeps a name -> id lookup into that arena, so
bundle identity is (package name, bundle name) and iteration order is always
an explicit sort rather than whatever order rows arrived in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from upgradegraph.exceptions import ParseError

PLACEHOLDER_VERSION = "x.y.z"
"""Label for bundles that were referenced but never observed with a version."""

FIELD_DELIMITER = "|"

_FIELD_COUNT = 7

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# CatalogEntry: one input row
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CatalogEntry:
    """One row of the flattened catalog.

    Attributes:
        package: Package name.
        channel: Channel name.
        bundle: Bundle name.
        depth: Distance from the channel head (0 = head).
        version: Bundle version, empty when the bundle was not observed.
        skip_range: Skip-range expression, possibly empty.
        replaces: Name of the bundle this one replaces, possibly empty.
    """

    package: str
    channel: str
    bundle: str
    depth: int
    version: str = ""
    skip_range: str = ""
    replaces: str = ""

    @classmethod
    def from_row(cls, row: str, delimiter: str = FIELD_DELIMITER) -> CatalogEntry:
        """Split a delimited row into an entry.

        A depth that is not an integer becomes 0.

        Raises:
            ParseError: If the row does not have exactly seven fields.
        """
        fields = row.split(delimiter)
        if len(fields) != _FIELD_COUNT:
            raise ParseError(
                f"Expected {_FIELD_COUNT} fields, got {len(fields)}: {row!r}"
            )
        package, channel, bundle, depth, version, skip_range, replaces = fields
        return cls(
            package=package,
            channel=channel,
            bundle=bundle,
            depth=parse_depth(depth),
            version=version,
            skip_range=skip_range,
            replaces=replaces,
        )


def parse_depth(text: str) -> int:
    """Parse a depth field, falling back to 0 for anything but ASCII digits.

    Signs, whitespace, underscores and non-ASCII digits are all rejected, so
    a negative depth such as ``-1`` also becomes 0.
    """
    if text.isascii() and text.isdigit():
        return int(text)
    logger.debug("Non-numeric depth %r treated as 0", text)
    return 0


# ---------------------------------------------------------------------------
# Bundle and Package
# ---------------------------------------------------------------------------


@dataclass
class Bundle:
    """A bundle node in the upgrade graph, merged from every row that names it."""

    id: int
    name: str
    package: str
    version: str = PLACEHOLDER_VERSION
    present: bool = False
    skip_range: str = ""
    min_depth: int = 0
    channels: set[str] = field(default_factory=set)
    replaces: set[str] = field(default_factory=set)
    skip_range_replaces: set[str] = field(default_factory=set)

    @property
    def is_head(self) -> bool:
        return self.min_depth == 0

    @property
    def has_edges(self) -> bool:
        return bool(self.replaces or self.skip_range_replaces)

    def merge(self, entry: CatalogEntry) -> None:
        """Fold a further observation of this bundle into the record.

        Channels and replaces targets are unioned, depth takes the minimum.
        Version and skip-range are only filled in if still unknown.
        """
        self.channels.add(entry.channel)
        if entry.replaces:
            self.replaces.add(entry.replaces)
        if entry.depth < self.min_depth:
            self.min_depth = entry.depth
        if entry.version and not self.present:
            self.version = entry.version
            self.present = True
        if entry.skip_range and not self.skip_range:
            self.skip_range = entry.skip_range

    def implicit_replaces(self) -> list[str]:
        """Skip-range targets that are not also explicit replaces, sorted."""
        return sorted(self.skip_range_replaces - self.replaces)


@dataclass
class Package:
    """A package: a name plus its bundle-name -> arena-id lookup."""

    name: str
    bundle_ids: dict[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.bundle_ids)


# ---------------------------------------------------------------------------
# Catalog: the arena
# ---------------------------------------------------------------------------


class Catalog:
    """All packages and bundles of one run.

    Bundles live in an append-only arena; removing a bundle clears its slot
    and its package lookup, so ids handed out earlier are never reused.

    Thread safety: This class is NOT thread-safe.
    """

    def __init__(self) -> None:
        self._arena: list[Bundle | None] = []
        self._packages: dict[str, Package] = {}

    def __len__(self) -> int:
        """Number of live bundles across all packages."""
        return sum(len(p) for p in self._packages.values())

    def __contains__(self, package: str) -> bool:
        return package in self._packages

    # -- lookup ------------------------------------------------------------

    def package(self, name: str) -> Package | None:
        return self._packages.get(name)

    def packages(self) -> list[Package]:
        """All packages, sorted by name."""
        return [self._packages[name] for name in sorted(self._packages)]

    def bundle(self, package: str, name: str) -> Bundle | None:
        pkg = self._packages.get(package)
        if pkg is None or name not in pkg.bundle_ids:
            return None
        return self._arena[pkg.bundle_ids[name]]

    def bundle_by_id(self, bundle_id: int) -> Bundle | None:
        return self._arena[bundle_id]

    def bundles(self, package: str) -> list[Bundle]:
        """Live bundles of *package*, sorted by name."""
        pkg = self._packages.get(package)
        if pkg is None:
            return []
        return [self._arena[pkg.bundle_ids[name]] for name in sorted(pkg.bundle_ids)]

    def channels(self, package: str) -> list[str]:
        """Union of the channels of every bundle in *package*, sorted."""
        names: set[str] = set()
        for b in self.bundles(package):
            names |= b.channels
        return sorted(names)

    def channel_bundles(self, package: str, channel: str) -> list[Bundle]:
        """Bundles of *package* that belong to *channel*, sorted by name."""
        return [b for b in self.bundles(package) if channel in b.channels]

    # -- mutation ----------------------------------------------------------

    def get_or_create_bundle(self, entry: CatalogEntry) -> tuple[Bundle, bool]:
        """Look up the entry's bundle, creating package and bundle if needed.

        A new bundle is initialised from *entry* (version, skip-range, depth,
        presence) but not merged; callers merge every entry themselves.

        Returns:
            ``(bundle, created)``.
        """
        pkg = self._packages.get(entry.package)
        if pkg is None:
            pkg = Package(name=entry.package)
            self._packages[entry.package] = pkg

        bundle_id = pkg.bundle_ids.get(entry.bundle)
        if bundle_id is not None:
            return self._arena[bundle_id], False

        bundle = Bundle(
            id=len(self._arena),
            name=entry.bundle,
            package=entry.package,
            version=entry.version or PLACEHOLDER_VERSION,
            present=bool(entry.version),
            skip_range=entry.skip_range,
            min_depth=entry.depth,
        )
        self._arena.append(bundle)
        pkg.bundle_ids[entry.bundle] = bundle.id
        return bundle, True

    def remove_bundle(self, package: str, name: str) -> Bundle | None:
        """Remove a bundle; a package left without bundles is removed too.

        Returns:
            The removed bundle, or None if it was not in the catalog.
        """
        pkg = self._packages.get(package)
        if pkg is None or name not in pkg.bundle_ids:
            return None
        bundle_id = pkg.bundle_ids.pop(name)
        removed = self._arena[bundle_id]
        self._arena[bundle_id] = None
        if not pkg.bundle_ids:
            del self._packages[package]
        return removed
