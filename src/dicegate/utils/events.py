"""Structured security-event log.

Events are emitted as one JSON object per record on the ``dicegate.events``
logger so they can be shipped separately from diagnostic logs::

    {"timestamp": "...", "event": "tool_called", "server": "dicegate", "tool": "roll_d6"}
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

EVENT_LOGGER_NAME = "dicegate.events"

_logger = logging.getLogger(EVENT_LOGGER_NAME)
_server_name = "dicegate"


def set_server_name(name: str) -> None:
    """Set the ``server`` field stamped on every subsequent event."""
    global _server_name
    _server_name = name


def log_event(event: str, level: int = logging.INFO, **details: Any) -> None:
    """Emit a single structured event."""
    if not _logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "server": _server_name,
        **details,
    }
    _logger.log(level, json.dumps(payload, default=str, ensure_ascii=False))
