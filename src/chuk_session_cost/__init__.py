# chuk_session_cost/__init__.py
"""
CHUK Session Cost - incremental token, cost and duration statistics for AI
assistant sessions.

Quick start:
    from chuk_session_cost import SessionCostCalculator

    calc = SessionCostCalculator()
    summary = calc.get_summary(events, engine="codex")
    print(calc.format_cost(summary.total_cost), calc.format_duration(summary.duration_seconds))

Components:
- timestamps / duration: best-effort timestamps and bounded-scan duration
- usage / fingerprint: usage block extraction and change detection
- cache: fingerprint-gated summary cache (one per consumer)
- aggregator / pricing: the full O(n) pass and model pricing
- calculator: the consumer entry points
"""

import logging

from chuk_session_cost.aggregator import Aggregator, SessionCostAggregator
from chuk_session_cost.cache import AggregationCache, SummaryCacheEntry
from chuk_session_cost.calculator import SessionCostCalculator, SessionCostTracker, compute_summary
from chuk_session_cost.duration import estimate_duration
from chuk_session_cost.fingerprint import build_usage_fingerprint
from chuk_session_cost.models import (
    EMPTY_SUMMARY,
    AggregationResult,
    CostEvent,
    CostTotals,
    Engine,
    SessionCostSummary,
    SummaryCacheStats,
    UsageCounts,
)
from chuk_session_cost.pricing import ModelPricing, PricingTable, format_cost, format_duration
from chuk_session_cost.timestamps import resolve_timestamp_ms
from chuk_session_cost.usage import extract_usage

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Entry points
    "SessionCostCalculator",
    "SessionCostTracker",
    "compute_summary",
    # Building blocks
    "AggregationCache",
    "SummaryCacheEntry",
    "Aggregator",
    "SessionCostAggregator",
    "build_usage_fingerprint",
    "estimate_duration",
    "extract_usage",
    "resolve_timestamp_ms",
    # Pricing & formatting
    "ModelPricing",
    "PricingTable",
    "format_cost",
    "format_duration",
    # Models
    "EMPTY_SUMMARY",
    "AggregationResult",
    "CostEvent",
    "CostTotals",
    "Engine",
    "SessionCostSummary",
    "SummaryCacheStats",
    "UsageCounts",
]
