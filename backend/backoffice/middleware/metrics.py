"""
Prometheus metrics middleware.

Collects HTTP request metrics (counter + histogram) and exposes
application-level counters for status transitions.
"""

import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# ── HTTP metrics ─────────────────────────────────────────────────────────────

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ── Workflow metrics ─────────────────────────────────────────────────────────

status_transitions_total = Counter(
    "status_transitions_total",
    "Application status changes persisted",
    ["from_status", "to_status"],
)

status_transition_denials_total = Counter(
    "status_transition_denials_total",
    "Application status changes refused, by reason",
    ["reason"],
)


def _normalize_path(path: str) -> str:
    """Collapse path parameters to reduce cardinality.

    e.g. /api/applications/6f1c...-...-.../status → /api/applications/{id}/status

    Any segment after /api/applications/ is an application id, whatever its shape.
    """
    parts = path.strip("/").split("/")
    is_application = parts[:2] == ["api", "applications"]
    normalized = []
    for i, part in enumerate(parts):
        if (is_application and i == 2) or (i > 1 and (part.isdigit() or len(part) > 20)):
            normalized.append("{id}")
        else:
            normalized.append(part)
    return "/" + "/".join(normalized)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Skip metrics endpoint itself to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        path = _normalize_path(request.url.path)

        start = time.time()
        response = await call_next(request)
        duration = time.time() - start

        http_requests_total.labels(
            method=method,
            path=path,
            status_code=response.status_code,
        ).inc()

        http_request_duration_seconds.labels(
            method=method,
            path=path,
        ).observe(duration)

        return response
