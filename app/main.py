from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.body_limit import BodySizeLimitMiddleware
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.tagging.router import router as tagging_router

setup_logging()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Generates English/Thai tags for arbitrary content using an Azure OpenAI "
            "chat-completion deployment with a JSON-schema constrained response.\n\n"
            "Each response carries the raw token usage and a derived cost estimate "
            "(USD and THB). Nothing is stored; every request is independent."
        ),
        openapi_tags=[
            {
                "name": "health",
                "description": "Liveness checks for load balancers and monitoring.",
            },
            {
                "name": "tags",
                "description": "Tag generation backed by Azure OpenAI.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    # Last added runs first: request id is assigned before the body limit is checked.
    app.add_middleware(BodySizeLimitMiddleware)
    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse, tags=["health"], summary="Liveness message")
    async def root() -> str:
        return "Tag Generation API is running."

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running. Azure OpenAI "
            "reachability is not checked."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(tagging_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""

    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()
