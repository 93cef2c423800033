# chuk_session_cost/models/engine.py
from __future__ import annotations

from enum import Enum


class Engine(str, Enum):
    """Execution engine that produced a session's events."""

    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"
