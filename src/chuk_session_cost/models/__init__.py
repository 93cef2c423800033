# chuk_session_cost/models/__init__.py
"""
Data models for session cost tracking.
"""

from chuk_session_cost.models.engine import Engine
from chuk_session_cost.models.stats import SummaryCacheStats
from chuk_session_cost.models.summary import (
    EMPTY_SUMMARY,
    AggregationResult,
    CostEvent,
    CostTotals,
    SessionCostSummary,
)
from chuk_session_cost.models.usage import UsageCounts

__all__ = [
    "EMPTY_SUMMARY",
    "AggregationResult",
    "CostEvent",
    "CostTotals",
    "Engine",
    "SessionCostSummary",
    "SummaryCacheStats",
    "UsageCounts",
]
