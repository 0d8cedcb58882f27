"""Logging setup — a rich console handler, installed once per process."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from railsnav.config import LOG_LEVEL

_initialized = False


def setup_logging(level: str | int | None = None) -> bool:
    """Configure the ``railsnav`` logger. Returns False if already done."""
    global _initialized
    if _initialized:
        return False
    _initialized = True

    handler = RichHandler(
        console=Console(stderr=True), show_time=False, show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger = logging.getLogger("railsnav")
    logger.addHandler(handler)
    logger.setLevel(level if level is not None else LOG_LEVEL.upper())
    return True
