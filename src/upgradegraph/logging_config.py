"""Shared logging helpers for upgradegraph."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.WARNING, force: bool = False) -> None:
    """Initialise the root logger with a terse stderr format.

    Parameters mirror ``logging.basicConfig``. The default WARNING level shows
    skipped rows and dropped bundles; pass ``force=True`` to reconfigure.
    """
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
        force=force,
    )
