"""Logging helpers.

Loggers are named after their module; events that describe a state change
are emitted as one JSON object per line through `log_event`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Union


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Configure root logging with a bare message format."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',
    )


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **kwargs: Any) -> None:
    """Emit a JSON log event."""
    record = {"event": event, **kwargs}
    try:
        message = json.dumps(record, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        message = f"[log-failed] {event} {kwargs}"
    logger.log(level, message)
