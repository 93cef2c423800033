# chuk_session_cost/pricing.py
"""
Model pricing and display formatting.

Rates are USD per million tokens. Some models bill a whole request at a
higher "long context" tier once its prompt exceeds a threshold; the tier is
chosen per request, never split within one.

The built-in table covers the model families the supported engines emit.
It is a snapshot, pass a custom table to ``PricingTable`` to override it.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from chuk_session_cost.config import DEFAULT_PRICING_MODEL
from chuk_session_cost.models.usage import UsageCounts

logger = logging.getLogger(__name__)

PER_MILLION = 1_000_000


class TierRates(BaseModel):
    """Per-million-token rates for one pricing tier."""

    input: float = Field(default=0.0, ge=0)
    output: float = Field(default=0.0, ge=0)
    cache_write: float = Field(default=0.0, ge=0)
    cache_read: float = Field(default=0.0, ge=0)

    def cost(self, usage: UsageCounts, billed_input: int) -> float:
        return (
            billed_input * self.input
            + usage.output_tokens * self.output
            + usage.cache_write_tokens * self.cache_write
            + usage.cache_read_tokens * self.cache_read
        ) / PER_MILLION


class ModelPricing(BaseModel):
    """Pricing for one model, with an optional long-context tier."""

    base: TierRates
    long_context: TierRates | None = None
    tier_threshold: int | None = Field(default=None, description="Prompt tokens above which long_context applies")

    # OpenAI-style usage reports cached tokens as a subset of input_tokens
    cached_input_included: bool = False

    def rates_for(self, usage: UsageCounts) -> TierRates:
        if self.long_context is not None and self.tier_threshold is not None:
            if self.prompt_tokens(usage) > self.tier_threshold:
                return self.long_context
        return self.base

    def prompt_tokens(self, usage: UsageCounts) -> int:
        if self.cached_input_included:
            return max(usage.input_tokens, usage.cache_read_tokens) + usage.cache_write_tokens
        return usage.prompt_tokens

    def cost(self, usage: UsageCounts) -> float:
        billed_input = usage.input_tokens
        if self.cached_input_included:
            billed_input = max(0, usage.input_tokens - usage.cache_read_tokens)
        return self.rates_for(usage).cost(usage, billed_input)


def _rates(input: float, output: float, cache_write: float, cache_read: float) -> TierRates:
    return TierRates(input=input, output=output, cache_write=cache_write, cache_read=cache_read)


DEFAULT_PRICING: dict[str, ModelPricing] = {
    # Anthropic
    "claude-opus-4-5": ModelPricing(base=_rates(5.0, 25.0, 6.25, 0.50)),
    "claude-opus-4": ModelPricing(base=_rates(15.0, 75.0, 18.75, 1.50)),
    "claude-sonnet-4": ModelPricing(
        base=_rates(3.0, 15.0, 3.75, 0.30),
        long_context=_rates(6.0, 22.5, 7.50, 0.60),
        tier_threshold=200_000,
    ),
    "claude-haiku-4-5": ModelPricing(base=_rates(1.0, 5.0, 1.25, 0.10)),
    "claude-3-5-haiku": ModelPricing(base=_rates(0.80, 4.0, 1.0, 0.08)),
    # OpenAI (Codex)
    "gpt-5-codex": ModelPricing(base=_rates(1.25, 10.0, 0.0, 0.125), cached_input_included=True),
    "gpt-5": ModelPricing(base=_rates(1.25, 10.0, 0.0, 0.125), cached_input_included=True),
    "gpt-5-mini": ModelPricing(base=_rates(0.25, 2.0, 0.0, 0.025), cached_input_included=True),
    # Google
    "gemini-2.5-pro": ModelPricing(
        base=_rates(1.25, 10.0, 0.0, 0.31),
        long_context=_rates(2.50, 15.0, 0.0, 0.625),
        tier_threshold=200_000,
        cached_input_included=True,
    ),
    "gemini-2.5-flash": ModelPricing(base=_rates(0.30, 2.50, 0.0, 0.075), cached_input_included=True),
}

# Family keywords tried when no table key occurs in the model name
FAMILY_FALLBACKS: tuple[tuple[str, str], ...] = (
    ("opus", "claude-opus-4"),
    ("sonnet", "claude-sonnet-4"),
    ("haiku", "claude-haiku-4-5"),
    ("codex", "gpt-5-codex"),
    ("gpt", "gpt-5"),
    ("flash", "gemini-2.5-flash"),
    ("gemini", "gemini-2.5-pro"),
)


class PricingTable:
    """Resolves model names to pricing, remembering each resolution."""

    def __init__(
        self,
        prices: dict[str, ModelPricing] | None = None,
        default_model: str = DEFAULT_PRICING_MODEL,
    ):
        self.prices = dict(DEFAULT_PRICING if prices is None else prices)
        if default_model not in self.prices:
            raise ValueError(f"Default model {default_model!r} has no pricing entry")
        self.default_model = default_model
        self._resolved: dict[str, str] = {}

    def resolve_model(self, model: str | None) -> str:
        """Map a reported model name to a pricing table key."""
        name = (model or "").strip().lower()
        if not name:
            return self.default_model

        cached = self._resolved.get(name)
        if cached is not None:
            return cached

        key = self._match(name)
        if key is None:
            logger.warning(f"No pricing for model {model!r}, using {self.default_model}")
            key = self.default_model
        self._resolved[name] = key
        return key

    def _match(self, name: str) -> str | None:
        if name in self.prices:
            return name

        # Longest key first so "claude-opus-4-5" beats "claude-opus-4"
        for key in sorted(self.prices, key=len, reverse=True):
            if key in name:
                return key

        for keyword, key in FAMILY_FALLBACKS:
            if keyword in name and key in self.prices:
                return key
        return None

    def get(self, model: str | None) -> ModelPricing:
        return self.prices[self.resolve_model(model)]

    def compute_cost(self, usage: UsageCounts, model: str | None) -> float:
        return self.get(model).cost(usage)


_default_table: PricingTable | None = None


def default_pricing_table() -> PricingTable:
    """Process-wide built-in table; model resolutions are remembered across callers."""
    global _default_table
    if _default_table is None:
        _default_table = PricingTable()
    return _default_table


def get_pricing(model: str | None) -> ModelPricing:
    """Pricing for ``model`` from the built-in table."""
    return default_pricing_table().get(model)


def compute_cost(usage: UsageCounts, model: str | None) -> float:
    """USD cost of one usage block, priced with the built-in table."""
    return default_pricing_table().compute_cost(usage, model)


# =============================================================================
# Formatting
# =============================================================================


def format_cost(amount: float) -> str:
    """Format a USD amount: ``$0.00``, ``$0.0123``, ``$12.34``."""
    if amount == 0:
        return "$0.00"
    if abs(amount) < 1:
        return f"${amount:.4f}"
    return f"${amount:.2f}"


def format_duration(seconds: float) -> str:
    """Format seconds as ``45s``, ``3m 20s`` or ``1h 5m``."""
    total = int(max(seconds, 0))
    if total < 60:
        return f"{total}s"
    minutes, secs = divmod(total, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s" if secs else f"{minutes}m"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m" if minutes else f"{hours}h"
