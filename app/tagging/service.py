from __future__ import annotations

import logging
from typing import Any, Protocol

from app.core.llm.json_parsing import loads_strict
from app.core.metrics import record_llm_usage
from app.domain.exceptions import TaggingError, TaggingErrorKind
from app.tagging.content import resolve_message_content
from app.tagging.pricing import calculate_cost
from app.tagging.prompt import (
    PromptConfig,
    build_prompt_from_input,
    interpolate_template,
    resolve_prompt_config,
)
from app.tagging.schemas import CostBreakdown, TaggingRequest

logger = logging.getLogger("app.tagging")


class CompletionClient(Protocol):
    async def create_completion(
        self,
        *,
        system_message: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        schema: dict[str, Any],
    ) -> Any: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_missing(value: Any) -> bool:
    # null, "", 0 and false all count as absent input; [] and {} do not.
    return value is None or value in ("", 0)


def _first_message(completion: Any) -> dict[str, Any]:
    choices = completion.get("choices") if isinstance(completion, dict) else None
    choice = choices[0] if isinstance(choices, list) and choices else None
    message = choice.get("message") if isinstance(choice, dict) else None
    if not isinstance(message, dict):
        raise TaggingError(
            TaggingErrorKind.NO_MESSAGE, "Azure OpenAI returned no choices/message."
        )
    return message


def _parse_message_json(message: dict[str, Any]) -> dict[str, Any]:
    content = resolve_message_content(message.get("content"))
    text = content.extract_text() if content is not None else None
    if text is None or not text.strip():
        raise TaggingError(
            TaggingErrorKind.EMPTY_CONTENT,
            "Azure OpenAI returned an empty or unsupported message content.",
        )

    try:
        parsed = loads_strict(text)
    except ValueError as exc:
        raise TaggingError(
            TaggingErrorKind.UNPARSEABLE_CONTENT,
            f"Unable to parse AI response as JSON: {exc}",
        ) from exc

    if not isinstance(parsed, dict):
        raise TaggingError(
            TaggingErrorKind.UNPARSEABLE_CONTENT,
            "Unable to parse AI response as JSON: expected a JSON object",
        )
    return parsed


def extract_token_counts(usage: Any) -> tuple[Any, Any]:
    """Return (input, output) token counts, accepting chat and responses-style field names."""

    if not isinstance(usage, dict):
        return None, None
    input_tokens = usage.get("prompt_tokens")
    if input_tokens is None:
        input_tokens = usage.get("input_tokens")
    output_tokens = usage.get("completion_tokens")
    if output_tokens is None:
        output_tokens = usage.get("output_tokens")
    return input_tokens, output_tokens


class TaggingService:
    def __init__(
        self,
        *,
        llm_client: CompletionClient,
        prompt_config: PromptConfig,
        deployment: str,
    ):
        self._llm = llm_client
        self._prompt_config = prompt_config
        self._deployment = deployment

    def _price(self, usage: Any) -> CostBreakdown | None:
        input_tokens, output_tokens = extract_token_counts(usage)
        if not (_is_number(input_tokens) and _is_number(output_tokens)):
            return None

        pricing = calculate_cost(input_tokens, output_tokens, self._deployment)
        if input_tokens >= 0 and output_tokens >= 0:
            record_llm_usage(
                deployment=self._deployment,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                cost_usd=pricing.total_cost_usd,
            )
        return pricing

    async def generate_tags(self, request: TaggingRequest) -> dict[str, Any]:
        """
        Run the tagging pipeline: prompt -> completion -> JSON parse -> pricing.

        Any failure raises TaggingError; there is no partial result.
        """

        if _is_missing(request.input):
            raise TaggingError(
                TaggingErrorKind.UNSPECIFIED_INPUT,
                "Missing 'input' in request body",
                status_code=400,
            )

        config = resolve_prompt_config(
            self._prompt_config, request.custom_prompt, system_message=request.prompt
        )
        if config.response_schema is None:
            raise TaggingError(
                TaggingErrorKind.MISSING_SCHEMA,
                "Missing JSON schema configuration for tagging.",
                status_code=500,
            )

        user_message = interpolate_template(
            config.user_template, {"json_input": build_prompt_from_input(request.input)}
        )

        completion = await self._llm.create_completion(
            system_message=config.system_message,
            user_message=user_message,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            schema=config.response_schema,
        )

        ai_output = _parse_message_json(_first_message(completion))

        usage = completion.get("usage")
        pricing = self._price(usage)
        if pricing is None:
            logger.info(
                "Completion reported no token usage; pricing omitted",
                extra={"deployment": self._deployment},
            )

        return {
            **ai_output,
            "usage": usage,
            "pricing": pricing.model_dump(by_alias=True) if pricing is not None else None,
        }
