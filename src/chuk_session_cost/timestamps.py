# chuk_session_cost/timestamps.py
"""Best-effort emission timestamps for session events."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Any

from chuk_session_cost.usage import get_nested

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)

# (parent key, child key) candidates, highest priority first
TIMESTAMP_FIELDS: tuple[tuple[str | None, str], ...] = (
    (None, "timestamp"),
    (None, "receivedAt"),
    (None, "sentAt"),
    ("message", "timestamp"),
)


def parse_timestamp_ms(value: Any) -> int | None:
    """Parse an ISO-8601 or RFC 2822 date string to epoch milliseconds.

    Naive values are read as UTC. Returns None for anything unparseable.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    parsed: datetime | None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    try:
        return (parsed - EPOCH) // _ONE_MS
    except OverflowError:
        return None


def resolve_timestamp_ms(event: Any) -> int | None:
    """Return the first parseable timestamp on ``event`` in epoch ms, else None."""
    for parent, key in TIMESTAMP_FIELDS:
        ms = parse_timestamp_ms(get_nested(event, parent, key))
        if ms is not None:
            return ms
    return None
