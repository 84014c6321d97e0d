"""
Alumni Portal - HTTP Middleware
Request logging with correlation ids, response headers and body size limits
"""

import time
from typing import Callable, FrozenSet
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from alumni_portal.core.config import settings
from alumni_portal.core.logging_config import (
    logger,
    set_request_id,
    set_account_id,
    generate_request_id,
)

# Probes and docs are not worth a log line per hit
QUIET_PATHS: FrozenSet[str] = frozenset({
    "/",
    f"{settings.API_PREFIX}/health",
    "/docs",
    "/redoc",
    "/openapi.json",
})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with an X-Request-ID (the client's, or a fresh one),
    times it, and logs the outcome. X-Request-ID and X-Response-Time are
    echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)
        path = request.url.path
        started = time.perf_counter()

        try:
            response = await call_next(request)

            duration_ms = (time.perf_counter() - started) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

            if path not in QUIET_PATHS:
                logger.log_request(request.method, path, response.status_code, duration_ms)
            return response
        except Exception as exc:
            logger.log_error_with_context(exc, context=f"{request.method} {path}")
            raise
        finally:
            set_request_id("")
            set_account_id("")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Hardening headers on every response. API responses carry session
    tokens and member contact details, so they are never cached.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if request.url.path.startswith(settings.API_PREFIX):
            response.headers["Cache-Control"] = "no-store"

        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies larger than ``max_size`` bytes with 413 before reading them"""

    def __init__(self, app: ASGIApp, max_size: int = settings.MAX_REQUEST_SIZE_MB * 1024 * 1024):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        content_length = request.headers.get("content-length", "")

        if content_length.isdigit() and int(content_length) > self.max_size:
            logger.warning(f"[Upload] Rejected {content_length} byte body on {request.url.path}")
            return JSONResponse(
                status_code=413,
                content={"error": f"Request body too large (limit {self.max_size} bytes)"},
            )

        return await call_next(request)
