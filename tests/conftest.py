"""Shared fixtures for upgradegraph tests."""

import pathlib

import pytest

# A small etcd-style catalog: two channels, a shared bundle, an explicit
# replaces chain, one skip-range, and a replaces target that never appears.
ETCD_ROWS = [
    "etcd|alpha|etcdoperator.v0.9.4|0|0.9.4|>=0.9.0 <0.9.4|etcdoperator.v0.9.2",
    "etcd|alpha|etcdoperator.v0.9.2|1|0.9.2||etcdoperator.v0.9.0",
    "etcd|alpha|etcdoperator.v0.9.0|2|0.9.0||etcdoperator.v0.6.1",
    "etcd|singlenamespace-alpha|etcdoperator.v0.9.4|0|0.9.4|>=0.9.0 <0.9.4|etcdoperator.v0.9.2",
    "etcd|singlenamespace-alpha|etcdoperator.v0.9.2|1|0.9.2||",
    "prometheus|beta|prometheusoperator.0.32.0|0|0.32.0||prometheusoperator.0.27.0",
    "prometheus|beta|prometheusoperator.0.27.0|1|0.27.0||",
]


@pytest.fixture
def etcd_rows() -> list[str]:
    """Catalog rows for the etcd and prometheus packages."""
    return list(ETCD_ROWS)


@pytest.fixture
def catalog_file(tmp_path: pathlib.Path, etcd_rows: list[str]) -> pathlib.Path:
    """Write the sample catalog rows to a file."""
    path = tmp_path / "catalog.txt"
    path.write_text("\n".join(etcd_rows) + "\n")
    return path
