from __future__ import annotations

import pytest

from app.tagging.pricing import DEFAULT_TIER, USD_TO_THB, calculate_cost, select_price_tier


def _per_million(model: str | None) -> tuple[float, float]:
    tier = select_price_tier(model)
    return tier.input_per_million, tier.output_per_million


@pytest.mark.parametrize(
    ("model", "expected"),
    [
        ("gpt-4o", (2.5, 10.0)),
        ("GPT-4o-mini", (2.5, 10.0)),
        ("gpt-4-turbo-2024-04-09", (10.0, 30.0)),
        ("my-gpt-4-32k-deployment", (10.0, 30.0)),
        ("gpt-4", (30.0, 60.0)),
        ("gpt-4-0613", (30.0, 60.0)),
        ("gpt-3.5-turbo", (0.5, 1.5)),
        ("gpt-35-turbo-16k", (0.5, 1.5)),
        ("gpt-5-chat", (2.5, 10.0)),
        ("", (2.5, 10.0)),
        (None, (2.5, 10.0)),
    ],
)
def test_price_tier_selection(model: str | None, expected: tuple[float, float]) -> None:
    assert _per_million(model) == expected


def test_zero_tokens_cost_nothing() -> None:
    pricing = calculate_cost(0, 0, "gpt-4o")
    assert pricing.total_cost_usd == 0
    assert pricing.total_cost_thb == 0


def test_default_tier_matches_gpt_4o_pricing() -> None:
    assert (DEFAULT_TIER.input_per_million, DEFAULT_TIER.output_per_million) == (2.5, 10.0)
    assert calculate_cost(1234, 567, "unknown-model") == calculate_cost(1234, 567, "gpt-4o")


def test_gpt_35_spellings_price_identically() -> None:
    dotted = calculate_cost(10_000, 2_000, "gpt-3.5-turbo")
    hyphenated = calculate_cost(10_000, 2_000, "gpt-35-turbo")
    assert dotted == hyphenated
    assert dotted.breakdown.model_pricing.input_price_per_1m == 0.5
    assert dotted.breakdown.model_pricing.output_price_per_1m == 1.5


def test_unmatched_deployment_uses_default_tier_breakdown() -> None:
    pricing = calculate_cost(100, 50, "gpt-5-chat").model_dump(by_alias=True)

    breakdown = pricing["breakdown"]
    assert breakdown["inputTokens"] == 100
    assert breakdown["outputTokens"] == 50
    assert breakdown["inputCostUSD"] == 0.00025
    assert breakdown["outputCostUSD"] == 0.0005
    assert pricing["totalCostUSD"] == 0.00075
    assert pricing["totalCostTHB"] == pytest.approx(0.00075 * USD_TO_THB, abs=1e-4)
    assert breakdown["exchangeRate"] == 35
    assert breakdown["modelPricing"] == {
        "inputPricePer1M": 2.5,
        "outputPricePer1M": 10.0,
        "currency": "USD",
    }


def test_one_million_tokens_convert_at_fixed_rate() -> None:
    pricing = calculate_cost(1_000_000, 1_000_000, "gpt-4o")
    assert pricing.breakdown.input_cost_usd == 2.5
    assert pricing.breakdown.output_cost_usd == 10.0
    assert pricing.total_cost_usd == 12.5
    assert pricing.breakdown.input_cost_thb == 87.5
    assert pricing.breakdown.output_cost_thb == 350.0
    assert pricing.total_cost_thb == 437.5


def test_amounts_are_rounded_to_fixed_precision() -> None:
    pricing = calculate_cost(1, 1, "gpt-3.5-turbo")
    # 0.5e-6 + 1.5e-6 USD; THB rounds to 4 decimals.
    assert pricing.total_cost_usd == 0.000002
    assert pricing.breakdown.input_cost_thb == 0.0
    assert pricing.total_cost_thb == 0.0001


@pytest.mark.parametrize("model", ["gpt-4o", "gpt-4", "gpt-35-turbo", "gpt-5-chat"])
def test_cost_is_monotonic_in_each_direction(model: str) -> None:
    totals_by_input = [calculate_cost(n, 0, model).total_cost_usd for n in range(0, 10_001, 1_000)]
    totals_by_output = [calculate_cost(0, n, model).total_cost_usd for n in range(0, 10_001, 1_000)]

    assert all(a < b for a, b in zip(totals_by_input, totals_by_input[1:]))
    assert all(a < b for a, b in zip(totals_by_output, totals_by_output[1:]))


def test_calculation_is_deterministic() -> None:
    assert calculate_cost(321, 654, "gpt-4o") == calculate_cost(321, 654, "gpt-4o")


def test_exact_half_rounds_up() -> None:
    # 3125 tokens at 2.5 USD/1M is exactly 0.0078125 in binary.
    pricing = calculate_cost(3125, 0, "gpt-5-chat")
    assert pricing.breakdown.input_cost_usd == 0.007813
    assert pricing.total_cost_usd == 0.007813
    assert pricing.breakdown.input_cost_thb == 0.2734
