"""Structured logging configuration for iondid.

Environment variables:
    IONDID_LOG_FORMAT  -- ``json`` for structured JSON output, ``text`` for human-readable (default).
    IONDID_LOG_LEVEL   -- Python log level name (default: ``INFO``).
"""

from __future__ import annotations

import logging
import os
import traceback
from typing import Any

_STRUCTURED_EXTRAS = ("operation", "did_suffix")


def _is_json_mode() -> bool:
    """Return True when structured JSON logging is requested."""
    return os.environ.get("IONDID_LOG_FORMAT", "text").lower() == "json"


def _get_log_level() -> int:
    """Return the numeric log level from IONDID_LOG_LEVEL (default INFO)."""
    name = os.environ.get("IONDID_LOG_LEVEL", "INFO").upper()
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric


class StructuredJsonFormatter(logging.Formatter):
    """JSON formatter that emits one JSON object per log line.

    Uses ``pythonjsonlogger`` under the hood but lifts the operation
    builder fields (operation, did_suffix) onto the output when they are
    present on the LogRecord.
    """

    def __init__(self) -> None:
        super().__init__()
        from pythonjsonlogger.json import JsonFormatter

        self._inner = JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        extras: dict[str, Any] = {}
        for key in _STRUCTURED_EXTRAS:
            value = getattr(record, key, None)
            if value is not None:
                extras[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            extras["traceback"] = traceback.format_exception(*record.exc_info)
            # Keep the inner formatter from appending it as free-form text.
            record.exc_info = None
            record.exc_text = None

        for k, v in extras.items():
            setattr(record, k, v)

        return self._inner.format(record)


def setup_logging() -> None:
    """Configure the root logger according to IONDID_LOG_FORMAT and IONDID_LOG_LEVEL."""
    level = _get_log_level()
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any existing handlers so we don't double-log during tests.
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if _is_json_mode():
        handler.setFormatter(StructuredJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    root.addHandler(handler)
