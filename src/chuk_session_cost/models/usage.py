# chuk_session_cost/models/usage.py
"""Normalized token counts for a single usage block."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from chuk_session_cost.usage import first_number

# Key spellings, in resolution order, used by the supported engines
INPUT_TOKEN_KEYS = ("input_tokens", "prompt_tokens")
OUTPUT_TOKEN_KEYS = ("output_tokens", "completion_tokens")
CACHE_READ_TOKEN_KEYS = ("cached_input_tokens", "cache_read_tokens", "cache_read_input_tokens")
CACHE_WRITE_TOKEN_KEYS = ("cache_creation_tokens", "cache_write_tokens", "cache_creation_input_tokens")


class UsageCounts(BaseModel):
    """Token counts of one usage block, with every alias resolved."""

    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)
    cache_read_tokens: int = Field(default=0, ge=0)
    cache_write_tokens: int = Field(default=0, ge=0)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens + self.cache_read_tokens + self.cache_write_tokens

    @property
    def prompt_tokens(self) -> int:
        """All tokens sent to the model, cached or not."""
        return self.input_tokens + self.cache_read_tokens + self.cache_write_tokens

    @classmethod
    def from_block(cls, usage: Mapping[str, Any] | None) -> UsageCounts:
        """Build counts from a raw usage block; bad or negative values become 0."""
        if not usage:
            return cls()
        return cls(
            input_tokens=_count(usage, INPUT_TOKEN_KEYS),
            output_tokens=_count(usage, OUTPUT_TOKEN_KEYS),
            cache_read_tokens=_count(usage, CACHE_READ_TOKEN_KEYS),
            cache_write_tokens=_count(usage, CACHE_WRITE_TOKEN_KEYS),
        )


def _count(usage: Mapping[str, Any], keys: tuple[str, ...]) -> int:
    value = first_number(usage, keys)
    return int(value) if value > 0 else 0
