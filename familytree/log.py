"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; entry points (the API
lifespan and the CLI callback) call :func:`configure_logging` once.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``familytree`` logger."""
    logger = logging.getLogger("familytree")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_familytree", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._familytree = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
