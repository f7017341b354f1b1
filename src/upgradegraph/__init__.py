"""upgradegraph: Render operator catalog upgrade graphs as diagrams."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
