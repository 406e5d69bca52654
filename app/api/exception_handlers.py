from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.exceptions import TaggingError, TaggingErrorKind

logger = logging.getLogger("app.tagging_errors")


def error_response(exc: TaggingError) -> JSONResponse:
    content: dict = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.http_status, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(TaggingError)
    async def handle_tagging_error(request: Request, exc: TaggingError) -> JSONResponse:
        # IMPORTANT: do not log request bodies or model output.
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        status_code = exc.http_status
        log = logger.error if status_code >= 500 else logger.info
        log(
            "Tag request failed: %s",
            exc.message,
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": status_code,
                "error": exc.kind.value,
            },
        )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        # Malformed JSON and wrong field types share the 400 error body shape.
        error = TaggingError(
            TaggingErrorKind.INVALID_BODY,
            "Invalid request body",
            status_code=400,
            details=[
                {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                for err in exc.errors()
            ],
        )
        return await handle_tagging_error(request, error)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        # Stack trace is logged by HttpLoggingMiddleware; only the kind of failure is recorded here.
        logger.error(
            "Tag request failed unexpectedly",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": 500,
                "error": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})
