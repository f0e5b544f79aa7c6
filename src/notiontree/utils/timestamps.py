"""Parsing for the ISO-8601 timestamps Notion returns."""

from __future__ import annotations

from datetime import datetime


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a Notion timestamp such as ``"2024-03-01T09:30:00.000Z"``.

    Returns an aware :class:`datetime`, or ``None`` for a missing or
    malformed value.
    """
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None
