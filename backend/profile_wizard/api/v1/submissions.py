"""Submissions API router.

Endpoints:
- POST /submissions: Validate, store and confirm a completed profile.

The body is the flat camelCase profile aggregate. It is read as raw JSON
rather than declared as a typed parameter so that validation failures use
the same ``{"errors": {...}}`` shape as the wizard's own step checks.
"""

import json

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from profile_wizard.api.deps import SubmissionServiceDep
from profile_wizard.core.config import settings
from profile_wizard.core.errors import ConflictError, InternalError, ValidationError
from profile_wizard.core.rate_limiting import limiter
from profile_wizard.schemas.profile import FORM_ERRORS_KEY
from profile_wizard.schemas.submission import (
    SubmissionConflict,
    SubmissionCreated,
    SubmissionInvalid,
    SubmissionResponse,
)

logger = structlog.get_logger()

router = APIRouter()

_INVALID_JSON_MSG = "Request body must be valid JSON."


@router.post("", status_code=201)
@limiter.limit(settings.rate_limit_submissions)
async def create_submission(
    request: Request,
    service: SubmissionServiceDep,
) -> JSONResponse:
    """Store a completed profile and send its confirmation email.

    Args:
        request: HTTP request (body source, required by rate limiter).
        service: Submission service (injected).

    Returns:
        201 with ``{"submission": {...}}``.

    Raises:
        ValidationError: 400 if the body is not JSON or fails validation.
        ConflictError: 409 if a submission with the email already exists.
        InternalError: 500 on storage (or, if configured, delivery) failure.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError({FORM_ERRORS_KEY: [_INVALID_JSON_MSG]}) from None

    outcome = await service.submit(payload)

    if isinstance(outcome, SubmissionCreated):
        logger.info(
            "Submission created",
            submission_id=str(outcome.record.id),
            notification_sent=outcome.notification_sent,
        )
        body = SubmissionResponse(submission=outcome.record)
        return JSONResponse(
            status_code=201,
            content=body.model_dump(by_alias=True, mode="json"),
        )
    if isinstance(outcome, SubmissionInvalid):
        raise ValidationError(outcome.errors)
    if isinstance(outcome, SubmissionConflict):
        raise ConflictError(code="DUPLICATE_SUBMISSION", message=outcome.message)
    raise InternalError(outcome.message)
