# chuk_session_cost/calculator.py
"""
SessionCostCalculator - running cost statistics for an AI assistant session.

Provides:
- ``compute_summary``: pure full recomputation (aggregate + duration)
- ``SessionCostCalculator``: per-consumer entry point; gated engines go
  through the fingerprint cache, others always recompute
- ``SessionCostTracker``: owns one calculator per session id

Examples:
    ```python
    calc = SessionCostCalculator()
    for event in stream:
        events.append(event)
        summary = calc.get_summary(events, engine="codex")
        print(calc.format_cost(summary.total_cost))
    ```
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from typing import Any

from chuk_session_cost.aggregator import Aggregator, SessionCostAggregator
from chuk_session_cost.cache import AggregationCache
from chuk_session_cost.config import API_SECONDS_PER_EVENT, GATED_ENGINES, TIMESTAMP_SCAN_WINDOW
from chuk_session_cost.duration import estimate_duration
from chuk_session_cost.models import EMPTY_SUMMARY, SessionCostSummary, SummaryCacheStats
from chuk_session_cost.pricing import format_cost, format_duration

logger = logging.getLogger(__name__)


def compute_summary(
    events: Sequence[Any],
    aggregator: Aggregator | None = None,
    timestamp_window: int = TIMESTAMP_SCAN_WINDOW,
    api_seconds_per_event: float = API_SECONDS_PER_EVENT,
) -> SessionCostSummary:
    """Aggregate ``events`` from scratch into a new summary.

    The estimated API duration is a placeholder: a fixed number of seconds
    per priced event, until engines report real call timings.
    """
    if not events:
        return EMPTY_SUMMARY

    result = (aggregator or SessionCostAggregator()).aggregate(events)
    duration_seconds = estimate_duration(
        events,
        result.first_event_timestamp_ms,
        result.last_event_timestamp_ms,
        window=timestamp_window,
    )
    return SessionCostSummary.from_aggregation(
        result,
        duration_seconds=duration_seconds,
        api_duration_seconds=len(result.events) * api_seconds_per_event,
    )


def _normalize_engine(engine: str | None) -> str:
    return engine.strip().lower() if isinstance(engine, str) else ""


class SessionCostCalculator:
    """
    Cost statistics for one consumer (one session view).

    Holds the fingerprint cache for that consumer, so create one instance
    per session and drop it (or call ``close``) when the session goes away.
    """

    def __init__(
        self,
        aggregator: Aggregator | None = None,
        gated_engines: Iterable[str] | None = None,
        timestamp_window: int = TIMESTAMP_SCAN_WINDOW,
        api_seconds_per_event: float = API_SECONDS_PER_EVENT,
    ):
        """
        Initialize a SessionCostCalculator.

        Args:
            aggregator: Full-pass aggregator. Defaults to SessionCostAggregator.
            gated_engines: Engines that reuse summaries while the usage
                fingerprint is unchanged. Defaults to CHUK_COST_GATED_ENGINES.
            timestamp_window: Events scanned at each end for duration.
            api_seconds_per_event: Estimated API seconds per priced event.
        """
        self.aggregator: Aggregator = aggregator or SessionCostAggregator()
        self.gated_engines = frozenset(
            _normalize_engine(name) for name in (GATED_ENGINES if gated_engines is None else gated_engines)
        )
        self.timestamp_window = timestamp_window
        self.api_seconds_per_event = api_seconds_per_event
        self._cache = AggregationCache()

    @property
    def cache(self) -> AggregationCache:
        return self._cache

    def is_gated(self, engine: str | None) -> bool:
        """Whether summaries for ``engine`` go through the fingerprint cache."""
        return _normalize_engine(engine) in self.gated_engines

    def recompute(self, events: Sequence[Any]) -> SessionCostSummary:
        """Full recomputation, bypassing the cache."""
        return compute_summary(
            events,
            aggregator=self.aggregator,
            timestamp_window=self.timestamp_window,
            api_seconds_per_event=self.api_seconds_per_event,
        )

    def get_summary(self, events: Sequence[Any], engine: str | None = None) -> SessionCostSummary:
        """Current statistics for ``events``.

        Args:
            events: All events of the session observed so far, oldest first.
            engine: Engine that produced them (``claude``, ``codex``, ...).

        Returns:
            The session summary; EMPTY_SUMMARY for an empty session.
        """
        if self.is_gated(engine):
            return self._cache.evaluate(events, self.recompute)
        return self.recompute(events)

    def get_cache_stats(self) -> SummaryCacheStats:
        return self._cache.get_stats()

    def reset(self) -> None:
        """Forget the cached summary, e.g. when the consumer switches session."""
        self._cache.reset()

    def close(self) -> None:
        self._cache.reset()

    @staticmethod
    def format_cost(amount: float) -> str:
        return format_cost(amount)

    @staticmethod
    def format_duration(seconds: float) -> str:
        return format_duration(seconds)


class SessionCostTracker:
    """
    Owns one SessionCostCalculator per session id.

    State is kept per instance, so separate trackers (and separate
    sessions within one tracker) never share a cache.
    """

    def __init__(self, **calculator_options: Any) -> None:
        self._calculator_options = calculator_options
        self._calculators: dict[str, SessionCostCalculator] = {}
        self._lock = threading.Lock()

    def calculator(self, session_id: str) -> SessionCostCalculator:
        """Get (creating on first use) the calculator for ``session_id``."""
        with self._lock:
            calc = self._calculators.get(session_id)
            if calc is None:
                calc = SessionCostCalculator(**self._calculator_options)
                self._calculators[session_id] = calc
                logger.debug(f"Created cost calculator for session {session_id}")
            return calc

    def get_summary(
        self,
        session_id: str,
        events: Sequence[Any],
        engine: str | None = None,
    ) -> SessionCostSummary:
        return self.calculator(session_id).get_summary(events, engine)

    def discard(self, session_id: str) -> bool:
        """Dispose of a session's calculator. Returns True if one existed."""
        with self._lock:
            calc = self._calculators.pop(session_id, None)
        if calc is None:
            return False
        calc.close()
        return True

    def clear(self) -> None:
        with self._lock:
            calculators = list(self._calculators.values())
            self._calculators.clear()
        for calc in calculators:
            calc.close()

    @property
    def session_ids(self) -> list[str]:
        with self._lock:
            return list(self._calculators)

    def __len__(self) -> int:
        with self._lock:
            return len(self._calculators)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._calculators
