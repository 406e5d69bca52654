"""Token cost estimation for Azure OpenAI deployments.

Prices are USD per million tokens (input/output). Tiers are matched by
case-insensitive substring on the deployment/model name, first match wins, so
more specific names must come before their prefixes (gpt-4o before gpt-4).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.tagging.schemas import CostBreakdown, CostDetail, ModelPricing

USD_TO_THB = 35
_TOKENS_PER_UNIT = 1_000_000


@dataclass(frozen=True, slots=True)
class PriceTier:
    input_per_million: float
    output_per_million: float


_PRICING_TIERS: tuple[tuple[tuple[str, ...], PriceTier], ...] = (
    (("gpt-4o",), PriceTier(2.5, 10.0)),
    (("gpt-4-turbo", "gpt-4-32k"), PriceTier(10.0, 30.0)),
    (("gpt-4",), PriceTier(30.0, 60.0)),
    (("gpt-35-turbo", "gpt-3.5-turbo"), PriceTier(0.5, 1.5)),
)

# Unlisted names (newer snapshots, gpt-5 deployments) are priced like gpt-4o.
DEFAULT_TIER = PriceTier(2.5, 10.0)


def select_price_tier(model: str | None) -> PriceTier:
    name = (model or "").lower()
    for needles, tier in _PRICING_TIERS:
        if any(needle in name for needle in needles):
            return tier
    return DEFAULT_TIER


_USD_STEP = Decimal("1e-6")
_THB_STEP = Decimal("1e-4")


def _round_half_up(value: float, step: Decimal) -> float:
    # Exact binary ties (0.0078125) round up, not to even.
    return float(Decimal(value).quantize(step, rounding=ROUND_HALF_UP))


def _usd(value: float) -> float:
    return _round_half_up(value, _USD_STEP)


def _thb(value_usd: float) -> float:
    return _round_half_up(value_usd * USD_TO_THB, _THB_STEP)


def calculate_cost(
    input_tokens: int | float, output_tokens: int | float, model: str | None
) -> CostBreakdown:
    """Price one completion call in USD and THB. Pure; never raises for numeric counts."""

    tier = select_price_tier(model)
    input_cost = (input_tokens / _TOKENS_PER_UNIT) * tier.input_per_million
    output_cost = (output_tokens / _TOKENS_PER_UNIT) * tier.output_per_million
    total_cost = input_cost + output_cost

    return CostBreakdown(
        total_cost_usd=_usd(total_cost),
        total_cost_thb=_thb(total_cost),
        breakdown=CostDetail(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            input_cost_usd=_usd(input_cost),
            output_cost_usd=_usd(output_cost),
            input_cost_thb=_thb(input_cost),
            output_cost_thb=_thb(output_cost),
            exchange_rate=USD_TO_THB,
            model_pricing=ModelPricing(
                input_price_per_1m=tier.input_per_million,
                output_price_per_1m=tier.output_per_million,
            ),
        ),
    )

