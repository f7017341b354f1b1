"""Semantic version parsing and skip-range evaluation.

A thin adapter over the ``semver`` library: versions are parsed and compared
by ``semver.Version``; this module only understands the range grammar that
catalog bundles use in their ``skipRange`` annotations.

Range grammar
-------------
- Alternatives separated by ``||`` (logical OR).
- Within an alternative, comparators separated by whitespace (logical AND).
- A comparator is an optional operator followed by a version. Supported
  operators: ``=``, ``==`` (or none) for equality, ``!``, ``!=``, ``>``,
  ``>=``, ``<``, ``<=``. Whitespace between operator and version is allowed
  (``>= 1.0.0``).
- Wildcard versions ``1.x``, ``1.x.x`` and ``1.2.x`` expand into a half-open
  interval, e.g. ``1.2.x`` means ``>=1.2.0 <1.3.0`` and ``<=1.x`` means
  ``<2.0.0``.

Version precedence follows SemVer 2.0.0: build metadata is ignored and a
pre-release sorts below its release.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import semver

from upgradegraph.exceptions import ParseError


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------


def parse_version(text: str) -> semver.Version:
    """Parse a strict SemVer 2.0.0 version string.

    Args:
        text: Version string such as ``"1.2.3"`` or ``"4.6.0-202011041933.p0"``.

    Returns:
        The parsed ``semver.Version``.

    Raises:
        ParseError: If *text* is not a valid semantic version.
    """
    try:
        return semver.Version.parse(text)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Invalid semantic version: {text!r}") from exc


# ---------------------------------------------------------------------------
# Comparators
# ---------------------------------------------------------------------------

_OPERATOR_RE = re.compile(r"^(?:>=|<=|!=|==|=|!|>|<)$")

_COMPARATOR_RE = re.compile(r"^(?P<op>>=|<=|!=|==|=|!|>|<)?(?P<ver>[^<>=!\s]+)$")

_WILDCARD_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)\."
    r"(?:(?P<minor>0|[1-9]\d*)\.[xX*]|[xX*](?:\.[xX*])?)$"
)

_OPERATOR_ALIASES: dict[str, str] = {
    "": "==",
    "=": "==",
    "==": "==",
    "!": "!=",
    "!=": "!=",
    ">": ">",
    ">=": ">=",
    "<": "<",
    "<=": "<=",
}


@dataclass(frozen=True)
class _Comparator:
    """One AND-ed term of a range alternative.

    The ``outside`` operator only comes from a negated wildcard and holds
    when the candidate lies outside ``[version, upper)``.
    """

    op: str
    version: semver.Version
    upper: semver.Version | None = None

    def __call__(self, candidate: semver.Version) -> bool:
        op = self.op
        if op == "==":
            return candidate == self.version
        elif op == "!=":
            return candidate != self.version
        elif op == ">":
            return candidate > self.version
        elif op == ">=":
            return candidate >= self.version
        elif op == "<":
            return candidate < self.version
        elif op == "<=":
            return candidate <= self.version
        elif op == "outside":
            return candidate < self.version or candidate >= self.upper
        else:  # pragma: no cover
            raise ValueError(f"Unknown operator: {op!r}")


def _expand_wildcard(op: str, match: re.Match[str]) -> list[_Comparator]:
    """Turn ``<op><wildcard>`` into concrete comparators."""
    major = int(match.group("major"))
    minor = match.group("minor")
    if minor is None:
        floor = semver.Version(major, 0, 0)
        ceiling = floor.bump_major()
    else:
        floor = semver.Version(major, int(minor), 0)
        ceiling = floor.bump_minor()

    if op == ">":
        return [_Comparator(">=", ceiling)]
    elif op == ">=":
        return [_Comparator(">=", floor)]
    elif op == "<":
        return [_Comparator("<", floor)]
    elif op == "<=":
        return [_Comparator("<", ceiling)]
    elif op == "!=":
        return [_Comparator("outside", floor, ceiling)]
    return [_Comparator(">=", floor), _Comparator("<", ceiling)]


def _split_comparators(alternative: str) -> list[str]:
    """Split an alternative on whitespace, gluing bare operators to their version."""
    tokens: list[str] = []
    pending = ""
    for token in alternative.split():
        if _OPERATOR_RE.match(token):
            if pending:
                raise ParseError(f"Dangling operator {pending!r} in {alternative!r}")
            pending = token
            continue
        tokens.append(pending + token)
        pending = ""
    if pending:
        raise ParseError(f"Dangling operator {pending!r} in {alternative!r}")
    return tokens


def _parse_comparator(token: str) -> list[_Comparator]:
    m = _COMPARATOR_RE.match(token)
    if not m:
        raise ParseError(f"Invalid range comparator: {token!r}")
    op = _OPERATOR_ALIASES[m.group("op") or ""]
    ver = m.group("ver")

    wildcard = _WILDCARD_RE.match(ver)
    if wildcard:
        return _expand_wildcard(op, wildcard)
    return [_Comparator(op, parse_version(ver))]


# ---------------------------------------------------------------------------
# VersionRange: the parsed skip-range predicate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VersionRange:
    """A parsed version range, usable as a predicate over ``semver.Version``.

    Attributes:
        raw: The range text as authored (e.g. ``">=1.0.0 <2.0.0"``).
        alternatives: OR-ed groups of AND-ed comparators.
    """

    raw: str
    alternatives: tuple[tuple[_Comparator, ...], ...]

    @classmethod
    def parse(cls, text: str) -> VersionRange:
        """Parse range text.

        Raises:
            ParseError: If the text is empty, has an empty alternative, or
                contains a malformed comparator or version.
        """
        if not isinstance(text, str) or not text.strip():
            raise ParseError(f"Empty version range: {text!r}")

        alternatives: list[tuple[_Comparator, ...]] = []
        for part in text.split("||"):
            tokens = _split_comparators(part)
            if not tokens:
                raise ParseError(f"Empty alternative in version range: {text!r}")
            comparators: list[_Comparator] = []
            for token in tokens:
                comparators.extend(_parse_comparator(token))
            alternatives.append(tuple(comparators))
        return cls(raw=text, alternatives=tuple(alternatives))

    def __call__(self, version: semver.Version) -> bool:
        return any(
            all(comparator(version) for comparator in alternative)
            for alternative in self.alternatives
        )

    def satisfies(self, version: str) -> bool:
        """Parse *version* and test it against this range.

        Raises:
            ParseError: If *version* is not a valid semantic version.
        """
        return self(parse_version(version))

    def __repr__(self) -> str:
        return f"VersionRange({self.raw!r})"


def parse_range(text: str) -> VersionRange:
    """Parse skip-range text into a ``VersionRange`` predicate."""
    return VersionRange.parse(text)


def matches(range_text: str, version_text: str) -> bool:
    """Return whether *version_text* lies inside *range_text*.

    Raises:
        ParseError: If either argument is malformed.
    """
    return parse_range(range_text)(parse_version(version_text))
