from __future__ import annotations

from starlette.requests import Request


def safe_route_label(request: Request) -> str:
    """
    Return the matched route template (e.g. /api/tags) for logs and metric labels.

    Unmatched requests (404) are reported as "unmatched" so raw paths never become
    unbounded label values.
    """

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"
