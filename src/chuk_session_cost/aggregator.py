# chuk_session_cost/aggregator.py
"""
Full-pass cost aggregation over a session's events.

This is the O(n) step the summary cache tries to avoid. Any object with an
``aggregate(events) -> AggregationResult`` method can stand in for the
default ``SessionCostAggregator``; it must be deterministic and report the
earliest/latest timestamps seen across the *whole* sequence, since the
duration estimator falls back on them.

Usage::

    from chuk_session_cost.aggregator import SessionCostAggregator

    result = SessionCostAggregator().aggregate(events)
    print(result.totals.total_cost, len(result.events))
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from chuk_session_cost.models.summary import AggregationResult, CostEvent, CostTotals
from chuk_session_cost.models.usage import UsageCounts
from chuk_session_cost.pricing import PricingTable, default_pricing_table
from chuk_session_cost.timestamps import resolve_timestamp_ms
from chuk_session_cost.usage import extract_usage, get_string

logger = logging.getLogger(__name__)

# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class Aggregator(Protocol):
    """Protocol for full recomputation of a session's cost totals."""

    def aggregate(self, events: Sequence[Any]) -> AggregationResult: ...


# =============================================================================
# Default implementation
# =============================================================================


def event_identity(event: Any) -> str | None:
    """Message id used to merge repeated usage reports for one message."""
    return get_string(event, "id", parent="message") or get_string(event, "id")


def event_model(event: Any) -> str | None:
    return get_string(event, "model") or get_string(event, "model", parent="message")


class SessionCostAggregator:
    """
    Prices every event that carries a usage block.

    Streaming engines re-emit usage for the same message as it grows, so
    events sharing a message id count once, with the latest usage seen for
    that id. Events without an id are counted individually.
    """

    def __init__(self, pricing: PricingTable | None = None) -> None:
        self.pricing = pricing or default_pricing_table()

    def aggregate(self, events: Sequence[Any]) -> AggregationResult:
        first_ms: int | None = None
        last_ms: int | None = None
        markers: list[CostEvent] = []
        position_by_id: dict[str, int] = {}

        for index, event in enumerate(events):
            ts = resolve_timestamp_ms(event)
            if ts is not None:
                first_ms = ts if first_ms is None else min(first_ms, ts)
                last_ms = ts if last_ms is None else max(last_ms, ts)

            block = extract_usage(event)
            if block is None:
                continue

            usage = UsageCounts.from_block(block)
            model = self.pricing.resolve_model(event_model(event))
            marker = CostEvent(
                index=index,
                event_id=event_identity(event),
                model=model,
                timestamp_ms=ts,
                usage=usage,
                cost=self.pricing.compute_cost(usage, model),
            )

            if marker.event_id is None:
                markers.append(marker)
            elif marker.event_id in position_by_id:
                markers[position_by_id[marker.event_id]] = marker
            else:
                position_by_id[marker.event_id] = len(markers)
                markers.append(marker)

        totals = CostTotals()
        for marker in markers:
            totals.add(marker.usage, marker.cost)

        logger.debug(f"Aggregated {len(events)} events into {len(markers)} priced events")
        return AggregationResult(
            totals=totals,
            events=markers,
            first_event_timestamp_ms=first_ms,
            last_event_timestamp_ms=last_ms,
        )
