"""Test helpers shared by the tagging and LLM client tests."""

from __future__ import annotations

import json
from typing import Any


def completion_body(
    content: Any,
    *,
    usage: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an Azure chat-completion response body with a single choice."""
    body: dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }
    if usage is not None:
        body["usage"] = usage
    return body


TAGS_JSON = json.dumps(
    {"tag_english": ["Football", "Collectible"], "tag_thai": ["ฟุตบอล", "ของสะสม"]},
    ensure_ascii=False,
)


class FakeCompletionClient:
    """Records calls and replays a canned completion body (or raises a canned error)."""

    def __init__(self, response: Any = None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def create_completion(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response
