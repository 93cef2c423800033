# chuk_session_cost/duration.py
"""
Wall-clock duration estimation.

Events are appended in (mostly) chronological order, so the first and last
timestamps of a session are found near its two ends. Scanning a fixed window
at each end keeps the estimate O(1) for long sessions; when the boundary
events carry no timestamps the caller's fallback pair, gathered during the
full aggregation pass, is used instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chuk_session_cost.config import TIMESTAMP_SCAN_WINDOW
from chuk_session_cost.timestamps import resolve_timestamp_ms


def find_timestamp_from_start(events: Sequence[Any], window: int = TIMESTAMP_SCAN_WINDOW) -> int | None:
    """First resolvable timestamp among the first ``window`` events."""
    for i in range(min(len(events), max(window, 0))):
        ms = resolve_timestamp_ms(events[i])
        if ms is not None:
            return ms
    return None


def find_timestamp_from_end(events: Sequence[Any], window: int = TIMESTAMP_SCAN_WINDOW) -> int | None:
    """First resolvable timestamp among the last ``window`` events, newest first."""
    stop = max(len(events) - window, 0)
    for i in range(len(events) - 1, stop - 1, -1):
        ms = resolve_timestamp_ms(events[i])
        if ms is not None:
            return ms
    return None


def estimate_duration(
    events: Sequence[Any],
    fallback_first_ms: int | None = None,
    fallback_last_ms: int | None = None,
    window: int = TIMESTAMP_SCAN_WINDOW,
) -> float:
    """Elapsed seconds between the first and last event of a session.

    Args:
        events: The session's events, oldest first.
        fallback_first_ms: Earliest timestamp seen across the whole sequence.
        fallback_last_ms: Latest timestamp seen across the whole sequence.
        window: Events inspected at each end before giving up on the scan.

    Returns:
        Duration in seconds, or 0.0 for an empty session or when no ordered
        pair is available.
    """
    if not events:
        return 0.0

    first = find_timestamp_from_start(events, window)
    last = find_timestamp_from_end(events, window)
    if first is not None and last is not None and last >= first:
        return (last - first) / 1000

    if fallback_first_ms is not None and fallback_last_ms is not None and fallback_last_ms >= fallback_first_ms:
        return (fallback_last_ms - fallback_first_ms) / 1000

    return 0.0
