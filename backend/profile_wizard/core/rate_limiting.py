"""Rate limiting configuration using slowapi.

Security: Limits how often one client may post submissions, so a script
cannot flood the submissions table or the confirmation mailer.

Usage in routers:
    from profile_wizard.core.rate_limiting import limiter

    @router.post("")
    @limiter.limit(settings.rate_limit_submissions)
    async def create_submission(request: Request, ...):
        ...
"""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from profile_wizard.core.config import settings

# Global limiter instance, keyed by client IP.
# Configured with in-memory storage (suitable for single-instance deployment)
# For multi-instance, configure Redis storage via RATELIMIT_STORAGE_URL
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_exceeded_handler(
    _request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Handle rate limit exceeded errors.

    Security: Returns 429 Too Many Requests in the same ``{"message"}``
    shape as the other non-validation errors.

    Args:
        request: The incoming request.
        exc: The rate limit exception.

    Returns:
        JSONResponse with 429 status and retry-after header.
    """
    # Parse retry-after from exception detail (e.g., "5 per 1 minute")
    # Fallback to 60 seconds if parsing fails
    try:
        retry_after = str(exc.detail.split()[-1])
        int(retry_after.rstrip("s"))
    except (ValueError, AttributeError, IndexError):
        retry_after = "60"

    return JSONResponse(
        status_code=429,
        content={"message": f"Rate limit exceeded: {exc.detail}"},
        headers={"Retry-After": retry_after},
    )
