"""FastAPI application entry point.

This module creates and configures the FastAPI application, including:
- Security, CORS and null-byte middleware
- Exception handlers mapping errors to the submission wire format
- API v1 router mounting
- Health check endpoint
"""

import logging

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from profile_wizard.api.v1.router import router as v1_router
from profile_wizard.core.config import settings
from profile_wizard.core.errors import INTERNAL_ERROR_MESSAGE, APIError
from profile_wizard.core.null_byte_middleware import NullByteMiddleware
from profile_wizard.core.rate_limiting import limiter, rate_limit_exceeded_handler
from profile_wizard.schemas.profile import FORM_ERRORS_KEY

logger = structlog.get_logger()

_SECURITY_HEADERS = {
    # Clickjacking protection
    "X-Frame-Options": "DENY",
    # Prevent MIME type sniffing
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    # API-only backend: responses never load resources or get framed
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses.

    API responses carry submitted personal data, so they are also marked
    uncacheable. HSTS is added in production only (HTTPS via reverse proxy).
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Add security headers to response."""
        response = await call_next(request)
        response.headers.update(_SECURITY_HEADERS)

        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, max-age=0"

        if settings.environment == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )

        return response


def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors.

    Args:
        request: The incoming request.
        exc: The APIError that was raised.

    Returns:
        JSONResponse with the error's own body and status code.
    """
    return JSONResponse(status_code=exc.status_code, content=exc.content())


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors.

    Converts them to the same ``{"errors": {path: [messages]}}`` body the
    submission endpoint uses. The leading location part ("body", "query")
    is dropped from the path.

    Args:
        request: The incoming request.
        exc: The RequestValidationError from Pydantic.

    Returns:
        JSONResponse with status 400.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"][1:]) or FORM_ERRORS_KEY
        errors.setdefault(path, []).append(error["msg"])
    return JSONResponse(status_code=400, content={"errors": errors})


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions.

    Never exposes internal error details to clients; the traceback goes to
    the log.

    Args:
        request: The incoming request.
        exc: The unhandled exception.

    Returns:
        JSONResponse with the generic 500 message.
    """
    logger.exception("Unhandled exception", exc_info=exc, path=str(request.url.path))

    return JSONResponse(
        status_code=500,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def configure_logging() -> None:
    """Route stdlib logging (services, repositories) at the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    WHY FACTORY FUNCTION:
    - Enables testing with different configurations
    - Clear separation between app creation and startup

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Profile Wizard API",
        version="1.0.0",
        description="Stores completed multi-step profile submissions",
    )

    # Middleware order: Starlette uses LIFO, so the LAST added runs FIRST.
    # CORS must run first to handle preflight requests, so add it last.
    app.add_middleware(NullByteMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "X-Request-ID"],
    )

    # Order matters: specific handlers first, then catch-all
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.state.limiter = limiter

    app.include_router(v1_router, prefix="/api/v1")

    # Health check endpoint (outside versioned API)
    @app.get("/health")
    def health_check() -> dict:
        """Health check endpoint for monitoring.

        Returns:
            {"status": "healthy"} if service is running.
        """
        return {"status": "healthy"}

    return app


# Used by uvicorn: uvicorn profile_wizard.main:app
configure_logging()
app = create_app()
