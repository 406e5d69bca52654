from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.tagging.schemas import PromptOverride

_PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


@dataclass(frozen=True)
class PromptConfig:
    system_message: str
    user_template: str
    temperature: float = 0
    max_tokens: int = 512
    response_schema: dict[str, Any] | None = field(default=None)


TAGGING_PROMPT = PromptConfig(
    temperature=0.9,
    max_tokens=512,
    system_message="\n".join(
        [
            "You are a professional tagging assistant.",
            "",
            "Your task:",
            "1. Read the user content (JSON form).",
            "2. Create up to 10 short English tags (1–3 words each) based on:",
            "   - category",
            "   - league",
            "   - team",
            "   - player",
            "   - collectable",
            "3. For every English tag, create a Thai translation tag at the same index.",
            "4. The output MUST be valid JSON with exactly two arrays:",
            '   - "tag_english": English tags',
            '   - "tag_thai": Thai tags',
            '5. "tag_english" and "tag_thai" MUST have the same length.',
            "6. Do NOT add any explanations or extra fields. Return JSON only.",
            "",
            "--- EXAMPLE OUTPUT FORMAT ---",
            "",
            json.dumps(
                {
                    "tag_english": [
                        "Football",
                        "Premier League",
                        "Manchester United",
                        "Cristiano Ronaldo",
                        "Collectible",
                    ],
                    "tag_thai": [
                        "ฟุตบอล",
                        "พรีเมียร์ลีก",
                        "แมนเชสเตอร์ ยูไนเต็ด",
                        "คริสเตียโน โรนัลโด",
                        "ของสะสม",
                    ],
                },
                ensure_ascii=False,
                indent=2,
            ),
            "",
            "(Example is only to show the style. Tags must be based on the actual user input.)",
        ]
    ),
    user_template="User Content JSON:\n\n{json_input}",
    response_schema={
        "name": "tags_schema",
        "schema": {
            "type": "object",
            "properties": {
                "tag_english": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "maxItems": 10,
                },
                "tag_thai": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "maxItems": 10,
                },
            },
            "required": ["tag_english", "tag_thai"],
            "additionalProperties": False,
        },
        "strict": True,
    },
)


def get_prompt_config() -> PromptConfig:
    """Dependency provider for the built-in prompt configuration."""
    return TAGGING_PROMPT


def resolve_prompt_config(
    base: PromptConfig,
    override: PromptOverride | None = None,
    *,
    system_message: str | None = None,
) -> PromptConfig:
    """
    Merge per-request overrides into `base`, field by field.

    Precedence for the system message: `system_message` (the plain `prompt` field),
    then `override.system_message`, then `base`. Every other field: override, then base.
    Empty strings never replace text fields; None never replaces anything.
    """

    override = override or PromptOverride()
    return PromptConfig(
        system_message=system_message or override.system_message or base.system_message,
        user_template=override.user_template or base.user_template,
        temperature=(
            override.temperature if override.temperature is not None else base.temperature
        ),
        max_tokens=override.max_tokens if override.max_tokens is not None else base.max_tokens,
        response_schema=(
            override.response_schema
            if override.response_schema is not None
            else base.response_schema
        ),
    )


def build_prompt_from_input(value: Any) -> str:
    """Render request input as prompt text: text passes through, anything else is pretty JSON."""

    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, indent=2)
    except (TypeError, ValueError):
        return str(value)


def interpolate_template(template: Any, variables: Mapping[str, Any]) -> str:
    """
    Replace `{name}` placeholders in a single, non-recursive pass.

    Names missing from `variables` become empty text; non-string templates render as "".
    """

    if not isinstance(template, str):
        return ""

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        return str(variables[key]) if key in variables else ""

    return _PLACEHOLDER_PATTERN.sub(_substitute, template)
