from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

# Part types checked in order of preference.
_PREFERRED_PART_TYPES = ("output_json", "text")


@dataclass(frozen=True)
class TextContent:
    """Message content returned as a plain string."""

    text: str

    def extract_text(self) -> str | None:
        return self.text


@dataclass(frozen=True)
class StructuredContent:
    """Message content returned as a list of typed parts (`{"type": ..., ...}`)."""

    parts: tuple[Mapping[str, Any], ...]

    def _find_part(self) -> Mapping[str, Any] | None:
        for part_type in _PREFERRED_PART_TYPES:
            for part in self.parts:
                if part.get("type") == part_type:
                    return part
        return None

    def extract_text(self) -> str | None:
        part = self._find_part()
        if part is None:
            return None
        payload = part.get("output_json") or part.get("text")
        return payload if isinstance(payload, str) else None


MessageContent = TextContent | StructuredContent


def resolve_message_content(raw: Any) -> MessageContent | None:
    """Classify a completion message's `content`; None when the shape is unsupported."""

    if isinstance(raw, str):
        return TextContent(text=raw)
    if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
        return StructuredContent(parts=tuple(p for p in raw if isinstance(p, Mapping)))
    return None
