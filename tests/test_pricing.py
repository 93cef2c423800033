# tests/test_pricing.py
"""Tests for model pricing and display formatting."""

import logging

import pytest

from chuk_session_cost.models.usage import UsageCounts
from chuk_session_cost.pricing import (
    DEFAULT_PRICING,
    ModelPricing,
    PricingTable,
    TierRates,
    compute_cost,
    default_pricing_table,
    format_cost,
    format_duration,
    get_pricing,
)


class TestModelResolution:
    @pytest.mark.parametrize(
        "model,expected",
        [
            ("claude-sonnet-4", "claude-sonnet-4"),
            ("claude-sonnet-4-5-20250929", "claude-sonnet-4"),
            ("claude-opus-4-5-20251101", "claude-opus-4-5"),
            ("claude-opus-4-1-20250805", "claude-opus-4"),
            ("claude-3-5-haiku-20241022", "claude-3-5-haiku"),
            ("claude-3-7-sonnet-latest", "claude-sonnet-4"),
            ("GPT-5-Codex", "gpt-5-codex"),
            ("gpt-5-mini", "gpt-5-mini"),
            ("o4-codex-preview", "gpt-5-codex"),
            ("gemini-2.5-flash-lite", "gemini-2.5-flash"),
            ("gemini-exp", "gemini-2.5-pro"),
        ],
    )
    def test_resolve(self, model, expected):
        assert PricingTable().resolve_model(model) == expected

    def test_missing_model_uses_default(self):
        table = PricingTable(default_model="claude-opus-4")
        assert table.resolve_model(None) == "claude-opus-4"
        assert table.resolve_model("  ") == "claude-opus-4"

    def test_unknown_model_warns_once(self, caplog):
        table = PricingTable()
        with caplog.at_level(logging.WARNING, logger="chuk_session_cost.pricing"):
            assert table.resolve_model("mystery-model") == table.default_model
            assert table.resolve_model("mystery-model") == table.default_model
        warnings = [r for r in caplog.records if "mystery-model" in r.getMessage()]
        assert len(warnings) == 1

    def test_default_model_must_be_priced(self):
        with pytest.raises(ValueError):
            PricingTable(prices={"a": ModelPricing(base=TierRates())}, default_model="b")

    def test_custom_table(self):
        table = PricingTable(prices={"local": ModelPricing(base=TierRates(input=1.0))}, default_model="local")
        assert table.compute_cost(UsageCounts(input_tokens=2_000_000), "anything") == pytest.approx(2.0)


class TestSharedTable:
    def test_module_functions_share_one_table(self, monkeypatch, caplog):
        monkeypatch.setattr("chuk_session_cost.pricing._default_table", None)
        assert default_pricing_table() is default_pricing_table()

        with caplog.at_level(logging.WARNING, logger="chuk_session_cost.pricing"):
            compute_cost(UsageCounts(input_tokens=1), "unpriced-shared-model")
            get_pricing("unpriced-shared-model")
            compute_cost(UsageCounts(output_tokens=1), "unpriced-shared-model")
        warnings = [r for r in caplog.records if "unpriced-shared-model" in r.getMessage()]
        assert len(warnings) == 1


class TestCost:
    def test_base_tier(self):
        usage = UsageCounts(input_tokens=100_000, output_tokens=100_000)
        assert compute_cost(usage, "claude-sonnet-4") == pytest.approx(1.8)

    def test_cache_rates(self):
        usage = UsageCounts(cache_read_tokens=100_000, cache_write_tokens=100_000)
        assert compute_cost(usage, "claude-sonnet-4") == pytest.approx(0.030 + 0.375)

    def test_per_million_rates_below_threshold(self):
        pricing = get_pricing("claude-sonnet-4")
        usage = UsageCounts(input_tokens=150_000, output_tokens=50_000)
        assert pricing.rates_for(usage) is pricing.base
        assert pricing.cost(usage) == pytest.approx(0.45 + 0.75)

    def test_long_context_tier_applies_to_whole_request(self):
        usage = UsageCounts(input_tokens=250_000, output_tokens=1_000)
        expected = (250_000 * 6.0 + 1_000 * 22.5) / 1_000_000
        assert compute_cost(usage, "claude-sonnet-4") == pytest.approx(expected)

    def test_tier_threshold_counts_cached_prompt(self):
        usage = UsageCounts(input_tokens=1_000, cache_read_tokens=250_000)
        pricing = get_pricing("claude-sonnet-4")
        assert pricing.rates_for(usage) is pricing.long_context

    def test_at_threshold_stays_on_base_tier(self):
        pricing = get_pricing("claude-sonnet-4")
        assert pricing.rates_for(UsageCounts(input_tokens=200_000)) is pricing.base

    def test_cached_input_subtracted_for_openai_usage(self):
        usage = UsageCounts(input_tokens=1_000, cache_read_tokens=400, output_tokens=100)
        expected = (600 * 1.25 + 100 * 10.0 + 400 * 0.125) / 1_000_000
        assert compute_cost(usage, "gpt-5-codex") == pytest.approx(expected)

    def test_zero_usage_is_free(self):
        for model in DEFAULT_PRICING:
            assert compute_cost(UsageCounts(), model) == 0.0


class TestFormatting:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "$0.00"),
            (0.0123, "$0.0123"),
            (0.5, "$0.5000"),
            (1, "$1.00"),
            (12.5, "$12.50"),
        ],
    )
    def test_format_cost(self, amount, expected):
        assert format_cost(amount) == expected

    @pytest.mark.parametrize(
        "seconds,expected",
        [
            (0, "0s"),
            (45, "45s"),
            (59.9, "59s"),
            (120, "2m"),
            (200, "3m 20s"),
            (3_600, "1h"),
            (3_900, "1h 5m"),
            (-5, "0s"),
        ],
    )
    def test_format_duration(self, seconds, expected):
        assert format_duration(seconds) == expected
