# chuk_session_cost/usage.py
"""
Usage extraction - locate the metering block of a session event.

Engines nest their usage data differently:

- Claude stream messages carry it under ``message.usage``
- Codex ``turn.completed`` events carry it at the top level, or under
  ``codexMetadata.usage`` once converted for display
- Gemini events carry it at the top level

Payloads are untrusted, so every helper here is total: a missing or
malformed value is reported as ``None`` / ``0``, never as an exception.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

# (parent key, child key) locations searched, in order
USAGE_LOCATIONS: tuple[tuple[str | None, str], ...] = (
    (None, "usage"),
    ("message", "usage"),
    ("codexMetadata", "usage"),
)


def get_nested(event: Any, parent: str | None, key: str) -> Any:
    """Return ``event[parent][key]`` (or ``event[key]``), ``None`` if unreachable."""
    if not isinstance(event, Mapping):
        return None
    if parent is not None:
        event = event.get(parent)
        if not isinstance(event, Mapping):
            return None
    return event.get(key)


def extract_usage(event: Any) -> Mapping[str, Any] | None:
    """Return the first usage block found on ``event``, or ``None``.

    Top-level ``usage`` wins over ``message.usage``, which wins over
    ``codexMetadata.usage``. Only mappings count as usage blocks.
    """
    for parent, key in USAGE_LOCATIONS:
        candidate = get_nested(event, parent, key)
        if isinstance(candidate, Mapping):
            return candidate
    return None


def to_number(value: Any) -> int | float:
    """Coerce a numeric-like value; anything unusable becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            parsed = float(text)
        except ValueError:
            return 0
        return parsed if math.isfinite(parsed) else 0
    return 0


def first_number(usage: Mapping[str, Any], keys: Sequence[str]) -> int | float:
    """Value of the first alias in ``keys`` that coerces to a non-zero number."""
    for key in keys:
        number = to_number(usage.get(key))
        if number:
            return number
    return 0


def get_string(event: Any, key: str, parent: str | None = None) -> str | None:
    """Return a string field, or ``None`` when absent or not a string."""
    value = get_nested(event, parent, key)
    return value if isinstance(value, str) else None
