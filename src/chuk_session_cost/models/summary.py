# chuk_session_cost/models/summary.py
"""Session cost summary and aggregation result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from chuk_session_cost.base_models import DictCompatModel
from chuk_session_cost.models.usage import UsageCounts

# =============================================================================
# Aggregation
# =============================================================================


class CostTotals(DictCompatModel):
    """Token and cost totals over every qualifying event of a session."""

    total_cost: float = 0.0
    total_tokens: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_write_tokens: int = 0

    def add(self, usage: UsageCounts, cost: float) -> None:
        self.total_cost += cost
        self.total_tokens += usage.total_tokens
        self.input_tokens += usage.input_tokens
        self.output_tokens += usage.output_tokens
        self.cache_read_tokens += usage.cache_read_tokens
        self.cache_write_tokens += usage.cache_write_tokens


class CostEvent(BaseModel):
    """Marker for one event that contributed to the totals."""

    index: int = Field(..., description="Position of the event in the session")
    event_id: str | None = Field(default=None, description="Message id used for de-duplication")
    model: str = Field(default="")
    timestamp_ms: int | None = Field(default=None)
    usage: UsageCounts = Field(default_factory=UsageCounts)
    cost: float = Field(default=0.0)


class AggregationResult(BaseModel):
    """Output of a full pass over a session's events."""

    totals: CostTotals = Field(default_factory=CostTotals)
    events: list[CostEvent] = Field(default_factory=list)

    # Earliest/latest resolvable timestamps across the whole sequence
    first_event_timestamp_ms: int | None = None
    last_event_timestamp_ms: int | None = None


# =============================================================================
# Summary
# =============================================================================


class SessionCostSummary(DictCompatModel):
    """Running statistics for one session. Never mutated; replaced wholesale."""

    model_config = ConfigDict(frozen=True)

    total_cost: float = 0.0
    total_tokens: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_tokens: int = 0
    cache_write_tokens: int = 0
    duration_seconds: float = 0.0  # wall clock
    api_duration_seconds: float = 0.0  # estimated cumulative API time

    @classmethod
    def from_aggregation(
        cls,
        result: AggregationResult,
        duration_seconds: float,
        api_duration_seconds: float,
    ) -> SessionCostSummary:
        totals = result.totals
        return cls(
            total_cost=totals.total_cost,
            total_tokens=totals.total_tokens,
            input_tokens=totals.input_tokens,
            output_tokens=totals.output_tokens,
            cache_read_tokens=totals.cache_read_tokens,
            cache_write_tokens=totals.cache_write_tokens,
            duration_seconds=duration_seconds,
            api_duration_seconds=api_duration_seconds,
        )


EMPTY_SUMMARY = SessionCostSummary()
