"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.config import Settings, get_settings
from core.rate_limit_config import RateLimitConfig, RateLimitExceededError
from core.rate_limiter import RateLimiter
from schemas.responses import (
    INTERNAL_ERROR_MESSAGE,
    INVALID_BODY_MESSAGE,
    RATE_LIMIT_MESSAGE,
    error_response,
)
from services.bookmark_store import BookmarkStore
from services.sample_data import seed_sample_bookmarks

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Add rate limit headers to successful responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add rate limit headers to response."""
        response = await call_next(request)

        # 429 responses get their headers from the exception handler
        info = getattr(request.state, "rate_limit_info", None)
        if info:
            response.headers["X-RateLimit-Limit"] = str(info["limit"])
            response.headers["X-RateLimit-Remaining"] = str(info["remaining"])
            response.headers["X-RateLimit-Reset"] = str(info["reset"])

        return response


async def rate_limit_exception_handler(
    _request: Request, exc: RateLimitExceededError,
) -> JSONResponse:
    """Handle rate limit exceeded with proper headers."""
    return error_response(
        RATE_LIMIT_MESSAGE,
        429,
        headers={
            "Retry-After": str(exc.result.retry_after),
            "X-RateLimit-Limit": str(exc.result.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(exc.result.reset),
        },
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Reject bodies that are not JSON objects."""
    logger.info(
        "invalid_request_body",
        extra={"path": request.url.path, "errors": exc.errors()},
    )
    return error_response(INVALID_BODY_MESSAGE, 400)


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the error envelope."""
    return error_response(str(exc.detail), exc.status_code, headers=exc.headers)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """
    Turn unexpected faults into the generic 500 envelope.

    Runs inside CORSMiddleware so the error response still carries CORS headers
    and browser clients can read the message.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request, logging and wrapping any unhandled exception."""
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "unhandled_exception",
                extra={"method": request.method, "path": request.url.path},
            )
            return error_response(INTERNAL_ERROR_MESSAGE, 500)


def create_app(
    settings: Settings | None = None,
    store: BookmarkStore | None = None,
) -> FastAPI:
    """
    Build the application with its own store and rate limiter.

    Args:
        settings:
            Configuration to use. Defaults to settings loaded from the environment.
        store:
            Bookmark store to serve. When omitted a new store is created and, if
            `settings.seed_sample_data` is set, filled with sample bookmarks.
    """
    settings = settings or get_settings()
    if store is None:
        store = BookmarkStore(settings)
        if settings.seed_sample_data:
            seed_sample_bookmarks(store)

    app = FastAPI(
        title="Bookmarks API",
        description="A personal bookmark manager with tagging and title auto-fill.",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.bookmark_store = store
    app.state.rate_limiter = (
        RateLimiter(RateLimitConfig.from_settings(settings))
        if settings.rate_limit_enabled
        else None
    )

    app.add_exception_handler(RateLimitExceededError, rate_limit_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    # Innermost: catches faults from routes before the other middleware see them
    app.add_middleware(UnhandledErrorMiddleware)

    # Rate limit headers middleware (runs first, adds headers to successful responses)
    app.add_middleware(RateLimitHeadersMiddleware)

    # Security headers middleware (runs after CORS, adds headers to responses)
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(bookmarks.router)
    return app


app = create_app()
