"""Graph configuration loaded from an optional YAML file.

Example ``upgradegraph.yaml``::

    direction: TB
    format: mermaid
    markdown: true
    package: etcd
    installed:
      - etcdoperator.v0.9.2
    head_style: "fill:#ffbfcf"
    installed_style: "fill:#34ebba"

Every key is optional. Command-line options override file values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from upgradegraph.core.render.options import DIRECTIONS, RenderOptions
from upgradegraph.exceptions import ConfigError

FORMATS: tuple[str, ...] = ("mermaid", "dot")

_KNOWN_KEYS = frozenset({
    "direction",
    "format",
    "markdown",
    "package",
    "installed",
    "head_style",
    "installed_style",
})


@dataclass(frozen=True)
class GraphConfig:
    """Resolved settings for one ``render`` invocation."""

    format: str = "mermaid"
    package: str | None = None
    render: RenderOptions = field(default_factory=RenderOptions)

    def with_overrides(
        self,
        *,
        format: str | None = None,
        package: str | None = None,
        installed: tuple[str, ...] = (),
        markdown: bool | None = None,
        direction: str | None = None,
    ) -> GraphConfig:
        """Return a copy with command-line values applied on top."""
        render = self.render
        if installed:
            render = replace(render, installed=render.installed | frozenset(installed))
        if markdown is not None:
            render = replace(render, markdown=markdown)
        if direction is not None:
            render = replace(render, direction=_check_direction(direction))
        return GraphConfig(
            format=_check_format(format) if format is not None else self.format,
            package=package if package is not None else self.package,
            render=render,
        )


def _check_direction(value: Any) -> str:
    if not isinstance(value, str) or value.upper() not in DIRECTIONS:
        raise ConfigError(
            f"Invalid direction {value!r}; expected one of {', '.join(DIRECTIONS)}"
        )
    return value.upper()


def _check_format(value: Any) -> str:
    if value not in FORMATS:
        raise ConfigError(f"Invalid format {value!r}; expected one of {', '.join(FORMATS)}")
    return value


def _check_str(key: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key} must be a non-empty string, got {value!r}")
    return value


def config_from_dict(data: dict[str, Any]) -> GraphConfig:
    """Validate a mapping of config values.

    Raises:
        ConfigError: On unknown keys or values of the wrong type.
    """
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    defaults = RenderOptions()
    installed = data.get("installed") or []
    if not isinstance(installed, list) or not all(isinstance(i, str) for i in installed):
        raise ConfigError("installed must be a list of bundle names")
    markdown = data.get("markdown", defaults.markdown)
    if not isinstance(markdown, bool):
        raise ConfigError(f"markdown must be true or false, got {markdown!r}")

    render = RenderOptions(
        direction=_check_direction(data.get("direction", defaults.direction)),
        head_style=_check_str("head_style", data.get("head_style", defaults.head_style)),
        installed_style=_check_str(
            "installed_style", data.get("installed_style", defaults.installed_style)
        ),
        installed=frozenset(installed),
        markdown=markdown,
    )
    package = data.get("package")
    if package is not None:
        package = _check_str("package", package)
    return GraphConfig(
        format=_check_format(data.get("format", "mermaid")),
        package=package,
        render=render,
    )


def load_config(path: Path | str | None) -> GraphConfig:
    """Load a YAML config file, or return defaults when *path* is None.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not a
            mapping, or holds invalid values.
    """
    if path is None:
        return GraphConfig()
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load config {str(path)!r}: {exc}") from exc

    if data is None:
        return GraphConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {str(path)!r} must be a mapping")
    return config_from_dict(data)
