"""
Shared pytest fixtures and configuration for chuk_session_cost tests.
"""

import logging
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from chuk_session_cost.aggregator import SessionCostAggregator
from chuk_session_cost.calculator import SessionCostCalculator

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("chuk_session_cost").setLevel(logging.DEBUG)


def iso(ms: int) -> str:
    """ISO-8601 UTC string for an epoch-millisecond value."""
    return datetime.fromtimestamp(ms / 1000, UTC).isoformat().replace("+00:00", "Z")


def build_event(
    timestamp_ms: int | None = None,
    usage: dict | None = None,
    model: str | None = None,
    engine: str | None = None,
    **extra,
) -> dict:
    """Build a session event dict with only the given fields set."""
    event: dict = dict(extra)
    if timestamp_ms is not None:
        event["timestamp"] = iso(timestamp_ms)
    if usage is not None:
        event["usage"] = usage
    if model is not None:
        event["model"] = model
    if engine is not None:
        event["engine"] = engine
    return event


@pytest.fixture
def make_event():
    """Factory for session event dicts; see ``build_event``."""
    return build_event


@pytest.fixture
def counting_aggregator():
    """Real aggregator wrapped so calls to ``aggregate`` can be counted."""
    aggregator = MagicMock(wraps=SessionCostAggregator())
    return aggregator


@pytest.fixture
def calculator(counting_aggregator):
    """Calculator with codex gated and an instrumented aggregator."""
    return SessionCostCalculator(
        aggregator=counting_aggregator,
        gated_engines=["codex"],
        timestamp_window=25,
        api_seconds_per_event=5,
    )


@pytest.fixture
def codex_turn():
    """Three codex events where only the turn-completed event reports usage."""
    return [
        build_event(1_000, engine="codex", type="thread.started"),
        build_event(2_000, engine="codex", type="item.completed"),
        build_event(
            5_000,
            engine="codex",
            model="gpt-5-codex",
            type="turn.completed",
            usage={"input_tokens": 100, "output_tokens": 50},
        ),
    ]
