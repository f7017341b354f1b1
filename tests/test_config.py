"""Tests for YAML graph configuration loading and CLI overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from upgradegraph.config import GraphConfig, config_from_dict, load_config
from upgradegraph.core.render import RenderOptions
from upgradegraph.exceptions import ConfigError


class TestLoadConfig:
    def test_none_path_gives_defaults(self) -> None:
        config = load_config(None)
        assert config == GraphConfig()
        assert config.format == "mermaid"
        assert config.render == RenderOptions()

    def test_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "graph.yaml"
        path.write_text(
            "direction: tb\n"
            "format: dot\n"
            "markdown: true\n"
            "package: etcd\n"
            "installed:\n"
            "  - etcdoperator.v0.9.2\n"
            "head_style: 'fill:#ff0000'\n"
        )
        config = load_config(path)
        assert config.format == "dot"
        assert config.package == "etcd"
        assert config.render.direction == "TB"
        assert config.render.markdown is True
        assert config.render.installed == frozenset({"etcdoperator.v0.9.2"})
        assert config.render.head_style == "fill:#ff0000"
        assert config.render.installed_style == RenderOptions().installed_style

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == GraphConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("direction: [unclosed\n")
        with pytest.raises(ConfigError, match="Cannot load config"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot load config"):
            load_config(tmp_path / "missing.yaml")

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config(path)


class TestValidation:
    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour"):
            config_from_dict({"colour": "red"})

    def test_bad_direction(self) -> None:
        with pytest.raises(ConfigError, match="Invalid direction"):
            config_from_dict({"direction": "up"})

    def test_bad_format(self) -> None:
        with pytest.raises(ConfigError, match="Invalid format"):
            config_from_dict({"format": "svg"})

    def test_installed_must_be_list(self) -> None:
        with pytest.raises(ConfigError, match="installed must be a list"):
            config_from_dict({"installed": "A"})

    def test_markdown_must_be_bool(self) -> None:
        with pytest.raises(ConfigError, match="markdown must be true or false"):
            config_from_dict({"markdown": "yes please"})

    def test_empty_package(self) -> None:
        with pytest.raises(ConfigError, match="package must be a non-empty string"):
            config_from_dict({"package": ""})


class TestOverrides:
    def test_cli_values_win(self) -> None:
        base = config_from_dict({"format": "dot", "package": "etcd", "installed": ["A"]})
        config = base.with_overrides(
            format="mermaid",
            package="prometheus",
            installed=("B",),
            markdown=True,
            direction="rl",
        )
        assert config.format == "mermaid"
        assert config.package == "prometheus"
        assert config.render.installed == frozenset({"A", "B"})
        assert config.render.markdown is True
        assert config.render.direction == "RL"

    def test_no_overrides_keep_file_values(self) -> None:
        base = config_from_dict({"format": "dot", "package": "etcd", "markdown": True})
        assert base.with_overrides() == base
