from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from alumni_portal import __version__
from alumni_portal.core.config import settings
from alumni_portal.core.database import init_db, close_db
from alumni_portal.core.exceptions import AlumniPortalError
from alumni_portal.core.logging_config import logger
from alumni_portal.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from alumni_portal.core.rate_limiter import limiter, rate_limit_exceeded_handler
from alumni_portal.api.router import api_router
import alumni_portal.models  # noqa: F401 - register models on the metadata

PLACEHOLDER_SECRETS = {"", "CHANGE_ME", "changeme", "secret"}


def validate_critical_config():
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if settings.JWT_SECRET_KEY in PLACEHOLDER_SECRETS:
        errors.append("JWT_SECRET_KEY is not set or using a placeholder value")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    if settings.is_production and "sqlite" in settings.DATABASE_URL:
        logger.warning("[Startup] WARNING: SQLite database in production")

    if not settings.CLOUDINARY_NAME:
        logger.warning("[Startup] WARNING: CLOUDINARY_NAME not set - clients cannot upload media")

    logger.info("[Startup] ✓ Critical configuration validated")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info("=" * 60)

    validate_critical_config()

    await init_db()
    logger.info("[Startup] Database tables ready")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def describe_validation_error(exc: RequestValidationError) -> str:
    """First validation problem as 'field: message'"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


app = FastAPI(
    title=settings.APP_NAME,
    description="Backend for university alumni portals: accounts, approvals, feed, messaging, events and directory",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE_MB * 1024 * 1024)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(AlumniPortalError)
async def portal_error_handler(request: Request, exc: AlumniPortalError):
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, context=f"{request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(400, describe_validation_error(exc))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    message = f"Something went wrong: {exc}" if settings.DEBUG else "Internal server error"
    return error_response(500, message)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": f"Welcome to the {settings.APP_NAME} API",
        "version": __version__,
        "docs": "/docs",
        "health": f"{settings.API_PREFIX}/health"
    }


app.include_router(api_router, prefix=settings.API_PREFIX)


def run():
    """Console entry point"""
    import uvicorn
    uvicorn.run(
        "alumni_portal.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG and not settings.is_production
    )


if __name__ == "__main__":
    run()
