"""Submission record and commit outcomes.

A submission ends in exactly one of four outcomes. The HTTP boundary maps
them to 201 / 400 / 409 / 500, and ``SubmissionClient`` maps the responses
back, so both sides of the wire speak the same types.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from profile_wizard.schemas.profile import ProfileSubmission


class SubmissionRecord(ProfileSubmission):
    """A stored profile with its server-assigned identity.

    Attributes:
        id: Server-assigned UUID.
        created_at: When the record was stored.
    """

    id: uuid.UUID
    created_at: datetime


@dataclass(frozen=True)
class SubmissionCreated:
    """The profile was stored.

    Attributes:
        record: The stored record.
        notification_sent: False when the confirmation email could not be
            delivered.
    """

    record: SubmissionRecord
    notification_sent: bool = True


@dataclass(frozen=True)
class SubmissionInvalid:
    """The profile failed validation. Nothing was stored or sent."""

    errors: dict[str, list[str]]


@dataclass(frozen=True)
class SubmissionConflict:
    """A submission already exists for this email. Nothing was sent."""

    message: str


@dataclass(frozen=True)
class SubmissionFailed:
    """Storage, delivery or transport failed. ``message`` is safe to show."""

    message: str


SubmissionOutcome = (
    SubmissionCreated | SubmissionInvalid | SubmissionConflict | SubmissionFailed
)


class SubmissionResponse(BaseModel):
    """201 response body: ``{"submission": {...}}``."""

    submission: SubmissionRecord
