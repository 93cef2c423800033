# chuk_session_cost/cache.py
"""
Summary Cache - reuse a session's cost summary until its usage changes.

Some engines (Codex) stream many events per turn, but only the event that
closes a turn carries usage data. Re-aggregating the whole session for each
intermediate event would make every update O(n). This cache keeps, per
consumer, the last summary together with the fingerprint and event count
that produced it, and recomputes only when:

- the newest event carries a usage block, and
- its fingerprint differs from the stored one.

A session that shrinks (fewer events than last time) is treated as a new
session in the same slot and clears the cache first.

The cache does not know how to aggregate; callers pass the pure
``recompute(events) -> SessionCostSummary`` function it wraps.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel, Field

from chuk_session_cost.fingerprint import build_usage_fingerprint
from chuk_session_cost.models import EMPTY_SUMMARY, SessionCostSummary, SummaryCacheStats
from chuk_session_cost.usage import extract_usage

logger = logging.getLogger(__name__)

RecomputeFn = Callable[[Sequence[Any]], SessionCostSummary]


class SummaryCacheEntry(BaseModel):
    """The (summary, fingerprint, event count) triple held for one consumer."""

    summary: SessionCostSummary = Field(default_factory=lambda: EMPTY_SUMMARY)
    fingerprint: str | None = Field(default=None, description="None until the first recompute")
    event_count: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        return self.fingerprint is None and self.event_count == 0


class AggregationCache:
    """
    Fingerprint-gated cache for one consumer's session summary.

    One instance per consumer; never share an instance between sessions.
    Evaluations are serialized so the stored triple is always consistent.
    """

    def __init__(self) -> None:
        self._entry = SummaryCacheEntry()
        self._lock = threading.RLock()
        self._stats = {
            "hits": 0,
            "misses": 0,
            "skips": 0,
            "resets": 0,
        }

    @property
    def entry(self) -> SummaryCacheEntry:
        """Current cache state (a copy; mutate through ``evaluate``/``reset``)."""
        with self._lock:
            return self._entry.model_copy()

    @property
    def summary(self) -> SessionCostSummary:
        return self._entry.summary

    def reset(self) -> None:
        """Drop the cached summary and fingerprint."""
        with self._lock:
            self._entry = SummaryCacheEntry()
            self._stats["resets"] += 1

    def evaluate(self, events: Sequence[Any], recompute: RecomputeFn) -> SessionCostSummary:
        """Return the summary for ``events``, recomputing only when needed.

        Args:
            events: The session's events as currently observed.
            recompute: Pure function producing a summary from all events.

        Returns:
            The cached summary object on a hit, otherwise a new one.
        """
        with self._lock:
            count = len(events)

            if count == 0:
                if not self._entry.is_empty:
                    self.reset()
                return EMPTY_SUMMARY

            if count < self._entry.event_count:
                logger.debug(f"Event count dropped {self._entry.event_count} -> {count}, resetting summary cache")
                self.reset()

            latest = events[-1]
            usage = extract_usage(latest)
            if usage is None:
                # Cost cannot have changed if the newest event reports no usage
                self._entry.event_count = count
                self._stats["skips"] += 1
                return self._entry.summary

            fingerprint = build_usage_fingerprint(latest, usage, count)
            if fingerprint == self._entry.fingerprint:
                self._entry.event_count = count
                self._stats["hits"] += 1
                return self._entry.summary

            summary = recompute(events)
            self._entry = SummaryCacheEntry(summary=summary, fingerprint=fingerprint, event_count=count)
            self._stats["misses"] += 1
            logger.debug(f"Recomputed summary for {count} events (fingerprint {fingerprint})")
            return summary

    def get_stats(self) -> SummaryCacheStats:
        """Get cache statistics."""
        with self._lock:
            return SummaryCacheStats(
                hits=self._stats["hits"],
                misses=self._stats["misses"],
                skips=self._stats["skips"],
                resets=self._stats["resets"],
                event_count=self._entry.event_count,
            )
