"""
Rate Limiting for the Alumni Portal API
=======================================
slowapi limiter keyed on the client address. ``SlowAPIMiddleware`` applies
RATE_LIMIT_PER_MINUTE to every route before authentication runs, so the
caller's account is not known yet and cannot be part of the key. Storage
defaults to in-process memory; point RATE_LIMIT_STORAGE_URI at redis:// for
multi-process deployments.

Endpoints that accept credentials (university register/login, member
signup/login) use ``auth_rate_limit()`` for brute-force protection.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from alumni_portal.core.config import settings
from alumni_portal.core.logging_config import logger

RATE_LIMIT_MESSAGE = "Too many requests. Please slow down."


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return the standard error body with a Retry-After hint"""
    logger.warning(f"[RateLimit] {get_remote_address(request)} exceeded {exc.detail} on {request.url.path}")

    return JSONResponse(
        status_code=429,
        content={"error": RATE_LIMIT_MESSAGE},
        headers={"Retry-After": "60"},
    )


def auth_rate_limit():
    """Rate limit for endpoints that accept credentials"""
    return limiter.limit(settings.AUTH_RATE_LIMIT)
