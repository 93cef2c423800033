from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Number of events inspected at each end of a session when estimating duration
TIMESTAMP_SCAN_WINDOW = int(os.getenv("CHUK_COST_TIMESTAMP_WINDOW", "25"))

# Coarse per-call API time estimate until real timings are available
API_SECONDS_PER_EVENT = float(os.getenv("CHUK_COST_API_SECONDS_PER_EVENT", "5"))

# Engines whose summaries are reused while the usage fingerprint is unchanged
GATED_ENGINES = frozenset(
    name.strip().lower() for name in os.getenv("CHUK_COST_GATED_ENGINES", "codex").split(",") if name.strip()
)

# Model used for pricing when an event does not declare one
DEFAULT_PRICING_MODEL = os.getenv("CHUK_COST_DEFAULT_MODEL", "claude-sonnet-4")
