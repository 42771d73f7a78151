"""Submission commit protocol.

Turns an untrusted payload into exactly one outcome:

1. Validate against the full profile rules → SubmissionInvalid
2. Create the record, unique per email → SubmissionConflict
3. Send the confirmation email
4. SubmissionCreated

No write happens before validation passes, and no email is sent unless the
record was created. Storage faults become SubmissionFailed with an opaque
message; the detail goes to the log only.

WHY create_unique INSTEAD OF LOOKUP-THEN-INSERT:
- Two concurrent submissions with the same email must not both succeed
- The record store enforces uniqueness atomically (database unique index)
"""

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from profile_wizard.core.config import settings
from profile_wizard.core.email import NotificationSender
from profile_wizard.core.errors import INTERNAL_ERROR_MESSAGE
from profile_wizard.schemas.profile import ProfileSubmission, validate_profile
from profile_wizard.schemas.submission import (
    SubmissionConflict,
    SubmissionCreated,
    SubmissionFailed,
    SubmissionInvalid,
    SubmissionOutcome,
    SubmissionRecord,
)
from profile_wizard.services.confirmation_email import (
    CONFIRMATION_SUBJECT,
    build_confirmation_body,
)

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A submission with this email already exists."


class RecordStore(Protocol):
    """Durable storage for submitted profiles."""

    async def create_unique(self, profile: ProfileSubmission) -> SubmissionRecord | None:
        """Store a profile unless one with the same email exists.

        Returns:
            The stored record, or None if the email is already taken.
        """
        ...


class SubmissionService:
    """Validates, stores and confirms profile submissions."""

    def __init__(
        self,
        store: RecordStore,
        notifier: NotificationSender,
        *,
        notification_failure_is_error: bool | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            store: Where records are created.
            notifier: Sends the confirmation email.
            notification_failure_is_error: Report a stored submission whose
                email failed as SubmissionFailed. Defaults to
                ``settings.notification_failure_is_error``.
        """
        self._store = store
        self._notifier = notifier
        self._notification_failure_is_error = (
            settings.notification_failure_is_error
            if notification_failure_is_error is None
            else notification_failure_is_error
        )

    async def submit(self, payload: object) -> SubmissionOutcome:
        """Run the commit protocol for one payload.

        Args:
            payload: Decoded JSON body, the flat camelCase aggregate.

        Returns:
            Exactly one SubmissionOutcome. Never raises for invalid input,
            duplicates or storage faults.
        """
        result = validate_profile(payload)
        if result.value is None:
            logger.info("Rejected submission with %d invalid fields", len(result.errors))
            return SubmissionInvalid(errors=result.errors)
        profile = result.value

        try:
            record = await self._store.create_unique(profile)
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to store submission")
            return SubmissionFailed(message=INTERNAL_ERROR_MESSAGE)

        if record is None:
            logger.info("Rejected duplicate submission")
            return SubmissionConflict(message=DUPLICATE_EMAIL_MESSAGE)

        sent = await self._notifier.send(
            record.email,
            CONFIRMATION_SUBJECT,
            build_confirmation_body(record),
        )
        if not sent:
            logger.warning("Submission %s stored but confirmation not sent", record.id)
            if self._notification_failure_is_error:
                return SubmissionFailed(message=INTERNAL_ERROR_MESSAGE)

        logger.info("Stored submission %s", record.id)
        return SubmissionCreated(record=record, notification_sent=sent)
