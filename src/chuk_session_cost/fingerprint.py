# chuk_session_cost/fingerprint.py
"""
Usage fingerprints - detect "nothing cost-relevant changed" without re-aggregating.

A fingerprint is built from the newest event only:

    count|timestamp|engine|model|input|cache_read|cache_write|output

Large content payloads are left out so building one stays cheap. Equal
fingerprints let a gated consumer reuse its cached summary; they are a
heuristic, not proof that two sessions aggregate to the same totals.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from chuk_session_cost.usage import first_number, get_string, to_number

FINGERPRINT_SEPARATOR = "|"

# Alias order matters: the first non-zero value wins
FINGERPRINT_CACHE_READ_KEYS = ("cached_input_tokens", "cache_read_tokens")
FINGERPRINT_CACHE_WRITE_KEYS = ("cache_creation_tokens", "cache_write_tokens")


def _render(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_usage_fingerprint(event: Any, usage: Mapping[str, Any], event_count: int) -> str:
    """Build the fingerprint for the newest event of a session.

    Args:
        event: The newest event.
        usage: Its usage block (see ``extract_usage``).
        event_count: Number of events in the session.

    Returns:
        A ``|``-delimited string of the cost-relevant fields.
    """
    timestamp = get_string(event, "timestamp")
    if timestamp is None:
        timestamp = get_string(event, "receivedAt") or ""

    parts = [
        str(event_count),
        timestamp,
        get_string(event, "engine") or "",
        get_string(event, "model") or "",
        _render(to_number(usage.get("input_tokens"))),
        _render(first_number(usage, FINGERPRINT_CACHE_READ_KEYS)),
        _render(first_number(usage, FINGERPRINT_CACHE_WRITE_KEYS)),
        _render(to_number(usage.get("output_tokens"))),
    ]
    return FINGERPRINT_SEPARATOR.join(parts)
