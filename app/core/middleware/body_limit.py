from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.api.exception_handlers import error_response
from app.core.settings import get_settings
from app.domain.exceptions import TaggingError, TaggingErrorKind

logger = logging.getLogger("app.http")


class BodySizeLimitMiddleware:
    """Reject request bodies larger than `MAX_REQUEST_BODY_BYTES` with 413.

    A declared Content-Length is checked before anything is read. Bodies without
    one (chunked uploads) are buffered up to the limit and replayed to the app,
    so oversized payloads never reach JSON parsing either way.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        limit = get_settings().max_request_body_bytes
        declared = request.headers.get("content-length")

        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                response = error_response(
                    TaggingError(
                        TaggingErrorKind.INVALID_BODY,
                        "Invalid Content-Length header",
                        status_code=400,
                    )
                )
                await response(scope, receive, send)
                return
            if size > limit:
                await self._reject(request, limit)(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        received = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > limit:
                await self._reject(request, limit)(scope, receive, send)
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    @staticmethod
    def _reject(request: Request, limit: int):
        logger.info(
            "Request body rejected (too large)",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": 413,
                "error": TaggingErrorKind.PAYLOAD_TOO_LARGE.value,
            },
        )
        return error_response(
            TaggingError(
                TaggingErrorKind.PAYLOAD_TOO_LARGE,
                f"Request body exceeds the {limit} byte limit",
                status_code=413,
            )
        )
