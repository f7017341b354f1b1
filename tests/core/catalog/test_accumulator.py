"""Tests for folding catalog rows into a Catalog.

Verifies:
    - Minimum-depth merge and head detection.
    - Channel and replaces unions across rows.
    - Package filtering with no side effects.
    - Placeholder versions for bundles never observed with one.
    - Lenient handling of blank, malformed, and CRLF-terminated rows.
"""

from __future__ import annotations

import logging

import pytest

from upgradegraph.core.catalog import (
    PLACEHOLDER_VERSION,
    Catalog,
    CatalogEntry,
    accumulate,
    add_entry,
)


class TestMerge:
    """Repeated observations of one bundle merge into a single record."""

    def test_min_depth_over_rows(self) -> None:
        catalog = accumulate([
            "pkg|stable|b|3|1.0.0||",
            "pkg|fast|b|0|1.0.0||",
            "pkg|candidate|b|5|1.0.0||",
        ])
        bundle = catalog.bundle("pkg", "b")
        assert bundle.min_depth == 0
        assert bundle.is_head is True

    def test_channels_union(self) -> None:
        catalog = accumulate([
            "pkg|stable|b|0|1.0.0||",
            "pkg|fast|b|0|1.0.0||",
        ])
        assert catalog.bundle("pkg", "b").channels == {"stable", "fast"}
        assert len(catalog) == 1

    def test_replaces_union(self) -> None:
        catalog = accumulate([
            "pkg|stable|c|0|3.0.0||b",
            "pkg|fast|c|0|3.0.0||a",
            "pkg|fast|c|0|3.0.0||",
        ])
        assert catalog.bundle("pkg", "c").replaces == {"a", "b"}

    def test_first_skip_range_is_kept(self) -> None:
        catalog = accumulate([
            "pkg|stable|c|0|3.0.0|<3.0.0|",
            "pkg|fast|c|0|3.0.0|<2.0.0|",
        ])
        assert catalog.bundle("pkg", "c").skip_range == "<3.0.0"

    def test_non_head_when_all_depths_positive(self) -> None:
        catalog = accumulate(["pkg|stable|b|2|1.0.0||", "pkg|fast|b|1|1.0.0||"])
        bundle = catalog.bundle("pkg", "b")
        assert bundle.min_depth == 1
        assert bundle.is_head is False


class TestPresence:
    def test_empty_version_uses_placeholder(self) -> None:
        catalog = accumulate(["pkg|stable|ghost|1|||"])
        bundle = catalog.bundle("pkg", "ghost")
        assert bundle.present is False
        assert bundle.version == PLACEHOLDER_VERSION

    def test_later_row_with_version_makes_present(self) -> None:
        catalog = accumulate(["pkg|stable|b|1|||", "pkg|fast|b|0|2.0.0||"])
        bundle = catalog.bundle("pkg", "b")
        assert bundle.present is True
        assert bundle.version == "2.0.0"

    def test_replaces_target_alone_is_not_a_bundle(self) -> None:
        catalog = accumulate(["pkg|stable|b|0|2.0.0||never-seen"])
        assert catalog.bundle("pkg", "never-seen") is None


class TestPackageFilter:
    def test_filter_keeps_only_matching_package(self, etcd_rows: list[str]) -> None:
        catalog = accumulate(etcd_rows, package="prometheus")
        assert [p.name for p in catalog.packages()] == ["prometheus"]

    def test_filter_with_unknown_package_is_empty(self, etcd_rows: list[str]) -> None:
        catalog = accumulate(etcd_rows, package="nope")
        assert len(catalog) == 0
        assert catalog.packages() == []

    def test_no_filter_keeps_all(self, etcd_rows: list[str]) -> None:
        catalog = accumulate(etcd_rows)
        assert [p.name for p in catalog.packages()] == ["etcd", "prometheus"]


class TestMalformedRows:
    def test_blank_rows_ignored(self) -> None:
        catalog = accumulate(["", "   ", "pkg|stable|b|0|1.0.0||", "\n"])
        assert len(catalog) == 1

    def test_line_terminators_stripped(self) -> None:
        catalog = accumulate(["pkg|stable|b|0|1.0.0||a\r\n"])
        assert catalog.bundle("pkg", "b").replaces == {"a"}

    def test_wrong_field_count_skipped_with_warning(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            catalog = accumulate(["pkg|stable|b|0", "pkg|stable|c|0|1.0.0||"])
        assert catalog.bundle("pkg", "b") is None
        assert catalog.bundle("pkg", "c") is not None
        assert "Skipping row 1" in caplog.text

    def test_malformed_depth_treated_as_zero(self) -> None:
        catalog = accumulate(["pkg|stable|b|NaN|1.0.0||"])
        assert catalog.bundle("pkg", "b").is_head is True


class TestIncremental:
    def test_accumulate_into_existing_catalog(self) -> None:
        catalog = Catalog()
        accumulate(["pkg|stable|a|0|1.0.0||"], catalog=catalog)
        result = accumulate(["pkg|stable|b|1|0.9.0||"], catalog=catalog)
        assert result is catalog
        assert [b.name for b in catalog.bundles("pkg")] == ["a", "b"]

    def test_add_entry(self) -> None:
        catalog = Catalog()
        add_entry(catalog, CatalogEntry("pkg", "stable", "a", 4, "1.0.0", "", "z"))
        add_entry(catalog, CatalogEntry("pkg", "fast", "a", 2, "", "", ""))
        bundle = catalog.bundle("pkg", "a")
        assert bundle.min_depth == 2
        assert bundle.channels == {"stable", "fast"}
        assert bundle.replaces == {"z"}
