from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from app.core.llm.json_parsing import loads_strict
from app.domain.exceptions import TaggingError, TaggingErrorKind

logger = logging.getLogger("app.llm")


@dataclass(frozen=True)
class AzureOpenAIConfig:
    endpoint: str | None
    api_key: str | None
    api_version: str
    deployment: str


def _upstream_error_message(data: Any) -> str:
    """Pick the most specific message from an Azure OpenAI error body."""

    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict):
        if error.get("message"):
            return str(error["message"])
        inner = error.get("innererror")
        if isinstance(inner, dict) and inner.get("message"):
            return str(inner["message"])
    return json.dumps(data, ensure_ascii=False)


class AzureOpenAIClient:
    """
    Single-shot Azure OpenAI chat-completion client with schema-constrained output.

    Design notes:
    - Exactly one HTTP request per call: no retry, no backoff, no timeout.
    - Configuration problems are reported before any network I/O.
    - Returns the decoded response body unmodified; content parsing belongs to callers.
    - Prompts and completions are not logged; only deployment, status and duration.
    """

    def __init__(
        self,
        *,
        config: AzureOpenAIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def deployment(self) -> str:
        return self._config.deployment

    def completion_url(self) -> httpx.URL:
        if not self._config.api_key or not self._config.endpoint:
            raise TaggingError(
                TaggingErrorKind.CONFIGURATION_ERROR,
                "Missing Azure OpenAI credentials. "
                "Please set AZURE_OPENAI_API_KEY and AZURE_OPENAI_ENDPOINT.",
                status_code=500,
            )

        try:
            base = httpx.URL(self._config.endpoint)
        except httpx.InvalidURL as exc:
            raise TaggingError(
                TaggingErrorKind.CONFIGURATION_ERROR,
                f"Invalid AZURE_OPENAI_ENDPOINT: {exc}",
                status_code=500,
            ) from exc
        if base.scheme not in {"http", "https"} or not base.host:
            raise TaggingError(
                TaggingErrorKind.CONFIGURATION_ERROR,
                f"Invalid AZURE_OPENAI_ENDPOINT: {self._config.endpoint!r} is not an absolute "
                "http(s) URL",
                status_code=500,
            )

        deployment = quote(self._config.deployment, safe="")
        # An absolute path replaces whatever path the configured endpoint carries.
        url = base.join(f"/openai/deployments/{deployment}/chat/completions")
        return url.copy_set_param("api-version", self._config.api_version)

    async def create_completion(
        self,
        *,
        system_message: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
        schema: dict[str, Any],
    ) -> Any:
        url = self.completion_url()
        headers = {
            "Content-Type": "application/json",
            "api-key": str(self._config.api_key),
        }
        payload: dict[str, Any] = {
            "temperature": temperature,
            "max_tokens": max_tokens,
            "messages": [
                {"role": "system", "content": system_message},
                {"role": "user", "content": user_message},
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": schema,
            },
        }

        started = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise TaggingError(
                TaggingErrorKind.TRANSPORT_ERROR,
                f"Azure OpenAI request failed: {exc}",
                status_code=502,
            ) from exc

        logger.info(
            "Azure OpenAI call completed",
            extra={
                "deployment": self._config.deployment,
                "upstream_status": resp.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
            },
        )

        try:
            data = loads_strict(resp.content)
        except ValueError as exc:
            raise TaggingError(
                TaggingErrorKind.TRANSPORT_ERROR,
                f"Azure OpenAI returned a non-JSON response: {resp.text or exc}",
                status_code=resp.status_code if resp.is_error else 502,
            ) from exc

        if not resp.is_success:
            raise TaggingError(
                TaggingErrorKind.UPSTREAM_ERROR,
                f"Azure OpenAI error ({resp.status_code}): {_upstream_error_message(data)}",
                status_code=resp.status_code,
                details=data,
            )

        return data
