#!/usr/bin/env python3
# examples/session_cost_example.py
"""
Running cost statistics for a streamed session.

• replays events one at a time, the way a UI receives them
• codex sessions reuse the cached summary until a new usage block arrives
• prints cache hit/miss counts at the end

Usage:
    python examples/session_cost_example.py                  # built-in demo
    python examples/session_cost_example.py events.jsonl --engine claude
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from chuk_session_cost import SessionCostCalculator

# ── logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
)
log = logging.getLogger(__name__)


# ── helpers ──────────────────────────────────────────────────────────
def demo_events() -> list[dict[str, Any]]:
    """Two codex turns: many progress events, usage only on turn.completed."""
    events: list[dict[str, Any]] = [{"type": "thread.started", "timestamp": "2025-06-01T10:00:00Z", "engine": "codex"}]
    for turn, (start, usage) in enumerate(
        [
            ("2025-06-01T10:00:0{}Z", {"input_tokens": 12_000, "cached_input_tokens": 8_000, "output_tokens": 900}),
            ("2025-06-01T10:01:0{}Z", {"input_tokens": 18_500, "cached_input_tokens": 15_000, "output_tokens": 1_400}),
        ]
    ):
        for step in range(1, 5):
            events.append({"type": "item.updated", "timestamp": start.format(step), "engine": "codex"})
        events.append(
            {
                "type": "turn.completed",
                "id": f"turn-{turn}",
                "timestamp": start.format(9),
                "engine": "codex",
                "model": "gpt-5-codex",
                "usage": usage,
            }
        )
    return events


def load_events(path: Path) -> list[dict[str, Any]]:
    events = []
    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:
                log.warning("Skipping malformed line: %.60s", line)
    return events


# ── replay ───────────────────────────────────────────────────────────
def replay(events: list[dict[str, Any]], engine: str) -> None:
    calc = SessionCostCalculator()
    seen: list[dict[str, Any]] = []

    for event in events:
        seen.append(event)
        summary = calc.get_summary(seen, engine=engine)
        log.info(
            "%3d events | %s | %7d tokens | wall %s | api ~%s",
            len(seen),
            calc.format_cost(summary.total_cost),
            summary.total_tokens,
            calc.format_duration(summary.duration_seconds),
            calc.format_duration(summary.api_duration_seconds),
        )

    if calc.is_gated(engine):
        stats = calc.get_cache_stats()
        log.info(
            "cache: %d recomputes, %d hits, %d skips (reuse %.0f%%)",
            stats.misses,
            stats.hits,
            stats.skips,
            stats.reuse_rate * 100,
        )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("events", nargs="?", type=Path, help="JSONL file of session events")
    parser.add_argument("--engine", default="codex", help="Engine that produced the events")
    args = parser.parse_args()

    events = load_events(args.events) if args.events else demo_events()
    replay(events, args.engine)


if __name__ == "__main__":
    main()
