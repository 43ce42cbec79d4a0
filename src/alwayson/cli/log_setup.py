"""Root logger setup for CLI commands."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure the root logger once. Later calls are no-ops."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
