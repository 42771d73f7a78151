"""HTTP client half of the submission contract.

``SubmissionClient.submit`` posts the aggregate to ``/api/v1/submissions``
and maps the response back onto the same outcome types the server-side
service produces, so ``finish_wizard`` can use either one as its submit
callable.
"""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from profile_wizard.core.errors import INTERNAL_ERROR_MESSAGE
from profile_wizard.schemas.submission import (
    SubmissionConflict,
    SubmissionCreated,
    SubmissionFailed,
    SubmissionInvalid,
    SubmissionOutcome,
    SubmissionResponse,
)

logger = logging.getLogger(__name__)

SUBMISSIONS_PATH = "/api/v1/submissions"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."

_DEFAULT_TIMEOUT = 15.0


class SubmissionClient:
    """Submits completed profiles to the wizard backend."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the client.

        Args:
            client: An httpx client whose ``base_url`` points at the backend.
                The caller owns its lifecycle.
        """
        self._client = client

    async def submit(self, payload: dict) -> SubmissionOutcome:
        """POST one profile and translate the response.

        Args:
            payload: The flat camelCase aggregate.

        Returns:
            SubmissionCreated on 201, SubmissionInvalid on 400,
            SubmissionConflict on 409 and SubmissionFailed otherwise,
            including network errors and unreadable responses.
        """
        try:
            resp = await self._client.post(
                SUBMISSIONS_PATH, json=payload, timeout=_DEFAULT_TIMEOUT
            )
        except httpx.HTTPError:
            logger.warning("Submission request failed", exc_info=True)
            return SubmissionFailed(message=UNEXPECTED_ERROR_MESSAGE)

        try:
            return _to_outcome(resp)
        except (ValueError, KeyError, TypeError, PydanticValidationError):
            logger.warning(
                "Unreadable submission response (status %d)",
                resp.status_code,
                exc_info=True,
            )
            return SubmissionFailed(message=UNEXPECTED_ERROR_MESSAGE)


def _to_outcome(resp: httpx.Response) -> SubmissionOutcome:
    """Map one HTTP response to an outcome.

    Raises:
        ValueError: If the body is not JSON.
        KeyError: If an expected key is missing.
        pydantic.ValidationError: If a 201 body is not a submission record.
    """
    if resp.status_code == 201:
        body = SubmissionResponse.model_validate(resp.json())
        return SubmissionCreated(record=body.submission)
    if resp.status_code == 400:
        return SubmissionInvalid(errors=resp.json()["errors"])
    if resp.status_code == 409:
        return SubmissionConflict(message=resp.json()["message"])

    logger.warning("Submission rejected with status %d", resp.status_code)
    message = INTERNAL_ERROR_MESSAGE if resp.status_code >= 500 else UNEXPECTED_ERROR_MESSAGE
    return SubmissionFailed(message=message)
