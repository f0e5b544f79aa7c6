"""Structured JSON logger for notiontree.

Each record is written as one JSON object per line so build logs can be
grepped or shipped to an aggregator unchanged::

    {"ts": "2026-01-05T09:12:44.120311+00:00", "level": "WARNING",
     "logger": "notiontree.materializer", "message": "Block children fetch failed",
     "op": "materialize", "container_id": "abc123", "error": "..."}

Usage::

    from notiontree.observability import get_logger

    log = get_logger("notiontree.assets")
    log.info("Asset downloaded", extra={"extra_fields": {"filename": "ab12.png"}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON.

    Guaranteed keys are ``ts`` (ISO-8601 UTC, taken from the record's
    creation time), ``level``, ``logger`` and ``message``.  Fields passed
    as ``extra={"extra_fields": {...}}`` are merged into the top level;
    ``exception`` and ``stack_info`` are added when the record has them.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(record, "extra_fields", None)
        if extra_fields:
            entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


# Names that already carry our handler; keeps get_logger idempotent.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "notiontree",
    *,
    level: int | str = logging.INFO,
    stream: Any | None = None,
) -> logging.Logger:
    """Return a logger that writes :class:`StructuredFormatter` output.

    Parameters
    ----------
    name:
        Logger name, e.g. ``"notiontree.materializer"``.
    level:
        Minimum level, as an ``int`` or a case-insensitive name.  Only
        applied the first time *name* is configured.
    stream:
        Handler output stream.  Defaults to ``sys.stderr``.

    Repeated calls with the same *name* return the same logger without
    stacking handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        logger.setLevel(resolved)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.propagate = False

        _configured_loggers.add(name)

    return logger
