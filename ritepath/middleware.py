# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request middleware for the RitePath API.

Every response carries an X-Request-ID (echoed from the caller or minted here)
so SMS fan-out log lines can be tied back to the request that caused them.
Route metrics label paths by route shape, with case, staff and vendor ids
collapsed to {param}.
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ritepath.metrics.prometheus import REQUEST_COUNT, REQUEST_LATENCY, HTTP_ERRORS

KNOWN_SEGMENTS: set[str] = {
    "api", "v1", "cases", "notify-staff", "all", "urgent", "broadcast",
    "recipients", "send-signature-sms", "hellosign-webhook", "staff", "reset",
    "vendors", "removal-teams", "profile", "notifications", "toggle-sms",
    "toggle-email", "phone-number", "email-address", "health", "ready", "metrics",
}

SKIP_PATHS: tuple[str, ...] = (
    "/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request id to request.state and to the response headers."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count requests, time them and count 4xx/5xx answers per route shape."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        response = await call_next(request)
        duration = time.time() - start

        path = request.url.path
        parts = path.strip("/").split("/")
        # Collapse ids so label cardinality stays bounded
        normalized = (
            "/"
            + "/".join(p if p in KNOWN_SEGMENTS else "{param}" for p in parts)
            if parts != [""]
            else path
        )

        if path not in SKIP_PATHS:
            REQUEST_COUNT.labels(
                method=request.method,
                endpoint=normalized,
                status=str(response.status_code),
            ).inc()
            REQUEST_LATENCY.labels(
                method=request.method,
                endpoint=normalized,
            ).observe(duration)
            if response.status_code >= 400:
                HTTP_ERRORS.labels(
                    method=request.method,
                    endpoint=normalized,
                    status=str(response.status_code),
                ).inc()

        return response
