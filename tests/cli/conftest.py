"""Shared fixtures for CLI tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def reset_root_logging() -> Iterator[None]:
    """Drop handlers the CLI installs on the root logger.

    ``configure_logging`` binds a handler to the stderr stream that
    ``CliRunner`` swaps in, which is closed once the invocation ends.
    """
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
    for handler in saved_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(saved_level)
