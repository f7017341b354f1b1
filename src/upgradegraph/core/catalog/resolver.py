"""Skip-range edge resolution.

After accumulation every bundle knows its explicit ``replaces`` targets. This
module adds the implicit ones: a bundle whose skip-range contains the version
of another bundle in the same package may upgrade directly from it.

Resolution runs in three phases over the catalog:

1. **Validate** -- parse every skip-range and every observed version. Bundles
   with a malformed field are marked for removal and logged.
2. **Match** -- for each surviving range owner, test every other surviving,
   present bundle of the package against the range. Pairwise, so quadratic in
   the number of bundles per package.
3. **Remove** -- drop marked bundles, and prune explicit edges that point at
   them so nothing in the rendered graph dangles into a removed node.

Nothing here is fatal: a malformed field costs one bundle, never the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import semver

from upgradegraph.core.catalog.constraints import (
    VersionRange,
    parse_range,
    parse_version,
)
from upgradegraph.core.catalog.model import Bundle, Catalog
from upgradegraph.exceptions import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemovedBundle:
    """A bundle dropped from the graph because a field failed to parse.

    Attributes:
        package: Owning package name.
        name: Bundle name.
        field: ``"skipRange"`` or ``"version"``.
        value: The offending text.
        reason: Parser error message.
    """

    package: str
    name: str
    field: str
    value: str
    reason: str


@dataclass
class ResolutionReport:
    """What a ``resolve`` pass changed."""

    removed: list[RemovedBundle] = field(default_factory=list)
    implicit_edges: int = 0

    @property
    def removed_names(self) -> set[tuple[str, str]]:
        return {(r.package, r.name) for r in self.removed}


def _validate(
    bundles: list[Bundle],
    report: ResolutionReport,
) -> tuple[dict[str, VersionRange], dict[str, semver.Version]]:
    """Parse ranges and versions of one package's bundles.

    Returns:
        ``(ranges, versions)`` keyed by bundle name, holding only bundles
        with no invalid field.
    """
    ranges: dict[str, VersionRange] = {}
    versions: dict[str, semver.Version] = {}

    for bundle in bundles:
        if bundle.skip_range:
            try:
                ranges[bundle.name] = parse_range(bundle.skip_range)
            except ParseError as exc:
                _mark_invalid(bundle, "skipRange", bundle.skip_range, exc, report)
                continue
        if bundle.present:
            try:
                versions[bundle.name] = parse_version(bundle.version)
            except ParseError as exc:
                ranges.pop(bundle.name, None)
                _mark_invalid(bundle, "version", bundle.version, exc, report)

    return ranges, versions


def _mark_invalid(
    bundle: Bundle,
    field_name: str,
    value: str,
    exc: ParseError,
    report: ResolutionReport,
) -> None:
    logger.warning(
        "invalid %s %r for bundle %r in package %r: %s -- bundle will not appear in graph",
        field_name, value, bundle.name, bundle.package, exc,
    )
    report.removed.append(
        RemovedBundle(
            package=bundle.package,
            name=bundle.name,
            field=field_name,
            value=value,
            reason=str(exc),
        )
    )


def _match(
    catalog: Catalog,
    package: str,
    ranges: dict[str, VersionRange],
    versions: dict[str, semver.Version],
    report: ResolutionReport,
) -> None:
    """Fill ``skip_range_replaces`` for every range owner in *package*."""
    for owner_name in sorted(ranges):
        owner = catalog.bundle(package, owner_name)
        predicate = ranges[owner_name]
        for candidate_name in sorted(versions):
            if candidate_name == owner_name:
                continue
            if predicate(versions[candidate_name]):
                if candidate_name not in owner.skip_range_replaces:
                    owner.skip_range_replaces.add(candidate_name)
                    report.implicit_edges += 1


def resolve(catalog: Catalog) -> ResolutionReport:
    """Compute skip-range edges and drop bundles with malformed fields.

    Mutates *catalog* in place.

    Args:
        catalog: An accumulated catalog.

    Returns:
        A ``ResolutionReport`` listing removed bundles and the number of
        implicit edges added.
    """
    report = ResolutionReport()

    for pkg in catalog.packages():
        bundles = catalog.bundles(pkg.name)
        ranges, versions = _validate(bundles, report)
        _match(catalog, pkg.name, ranges, versions, report)

    removed_by_package: dict[str, set[str]] = {}
    for removed in report.removed:
        catalog.remove_bundle(removed.package, removed.name)
        removed_by_package.setdefault(removed.package, set()).add(removed.name)

    for package, names in removed_by_package.items():
        for bundle in catalog.bundles(package):
            dangling = bundle.replaces & names
            if dangling:
                logger.debug(
                    "Pruning replaces %s of %r: targets were removed",
                    sorted(dangling), bundle.name,
                )
                bundle.replaces -= dangling

    return report
