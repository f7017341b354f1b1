"""upgradegraph exception hierarchy.

All public exceptions inherit from UpgradeGraphError, giving callers a single
base class to catch when they want to handle any upgradegraph-specific failure
without swallowing unrelated errors.
"""


class UpgradeGraphError(Exception):
    """Base exception for all upgradegraph errors."""


class ParseError(UpgradeGraphError):
    """Raised when a catalog row, version, or version range cannot be parsed.

    The engine never lets this escape a run: the accumulator skips the
    offending row and the resolver drops the offending bundle.
    """


class ConfigError(UpgradeGraphError):
    """Raised for unreadable or invalid graph configuration files."""
