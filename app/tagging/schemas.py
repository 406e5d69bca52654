from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PromptOverride(BaseModel):
    """Partial prompt configuration supplied per request (`customPrompt`)."""

    model_config = ConfigDict(populate_by_name=True)

    system_message: str | None = Field(
        default=None,
        alias="systemMessage",
        description="Replaces the built-in system message.",
    )
    user_template: str | None = Field(
        default=None,
        alias="userTemplate",
        description="User message template; `{json_input}` is replaced by the rendered input.",
        examples=["Tag this listing:\n\n{json_input}"],
    )
    temperature: float | None = Field(default=None, ge=0)
    max_tokens: int | None = Field(default=None, alias="maxTokens", ge=1)
    response_schema: dict[str, Any] | None = Field(
        default=None,
        alias="schema",
        description="`json_schema` descriptor forwarded as the completion `response_format`.",
    )


class TaggingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    input: Any = Field(
        default=None,
        description="Content to tag. Text is sent as-is; any other JSON value is pretty-printed.",
        examples=[{"title": "Signed Cristiano Ronaldo jersey", "league": "Premier League"}],
    )
    prompt: str | None = Field(
        default=None,
        description="Plain system-message override; wins over `customPrompt.systemMessage`.",
    )
    custom_prompt: PromptOverride | None = Field(default=None, alias="customPrompt")


class ModelPricing(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    input_price_per_1m: float = Field(alias="inputPricePer1M")
    output_price_per_1m: float = Field(alias="outputPricePer1M")
    currency: str = "USD"


class CostDetail(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    input_tokens: int | float = Field(alias="inputTokens")
    output_tokens: int | float = Field(alias="outputTokens")
    input_cost_usd: float = Field(alias="inputCostUSD")
    output_cost_usd: float = Field(alias="outputCostUSD")
    input_cost_thb: float = Field(alias="inputCostTHB")
    output_cost_thb: float = Field(alias="outputCostTHB")
    exchange_rate: float = Field(alias="exchangeRate")
    model_pricing: ModelPricing = Field(alias="modelPricing")


class CostBreakdown(BaseModel):
    """Derived cost of one completion call; serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_cost_usd: float = Field(alias="totalCostUSD")
    total_cost_thb: float = Field(alias="totalCostTHB")
    breakdown: CostDetail
