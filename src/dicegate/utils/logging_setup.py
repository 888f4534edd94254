"""Logging configuration for the CLI entrypoints.

Handlers write to stderr so the stdio transport keeps stdout for framed
JSON-RPC responses only.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from dicegate.utils.events import EVENT_LOGGER_NAME


def normalize_level(level: str) -> str:
    """Canonical stdlib name for *level* (``WARN`` -> ``WARNING``).

    Unknown names and ``NOTSET`` resolve to ``INFO``.
    """
    value = getattr(logging, level.strip().upper(), None)
    if not isinstance(value, int) or value <= logging.NOTSET:
        return "INFO"
    return logging.getLevelName(value)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stderr :class:`RichHandler` to the ``dicegate`` logger tree."""
    logger = logging.getLogger("dicegate")
    logger.setLevel(normalize_level(level))

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.handlers = [handler]
    logger.propagate = False

    # Events inherit the handler; only their level is pinned.
    logging.getLogger(EVENT_LOGGER_NAME).setLevel(logger.level)
    return logger
