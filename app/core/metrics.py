from __future__ import annotations

import time
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.middleware.routes import safe_route_label

metrics_router = APIRouter(tags=["monitoring"])

# Route label MUST be a route template (e.g. /api/tags) or a fixed value.

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status_code"),
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=("method", "route", "status_code"),
    # Tag requests are dominated by the upstream completion call, hence the long tail.
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

llm_tokens_total = Counter(
    "llm_tokens_total",
    "Tokens reported by the chat-completion API",
    labelnames=("deployment", "direction"),
)

llm_cost_usd_total = Counter(
    "llm_cost_usd_total",
    "Estimated chat-completion spend in USD",
    labelnames=("deployment",),
)


def record_llm_usage(
    *, deployment: str, input_tokens: int, output_tokens: int, cost_usd: float
) -> None:
    llm_tokens_total.labels(deployment=deployment, direction="input").inc(input_tokens)
    llm_tokens_total.labels(deployment=deployment, direction="output").inc(output_tokens)
    llm_cost_usd_total.labels(deployment=deployment).inc(cost_usd)


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route_label = safe_route_label(request)
            method = request.method
            code = str(int(status_code))
            duration = time.perf_counter() - started
            http_requests_total.labels(method=method, route=route_label, status_code=code).inc()
            http_request_duration_seconds.labels(
                method=method, route=route_label, status_code=code
            ).observe(duration)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    payload = generate_latest()
    return Response(content=cast(bytes, payload), media_type=CONTENT_TYPE_LATEST)
