"""Pydantic schemas for the profile aggregate and submissions."""

from profile_wizard.schemas.profile import (
    ProfileSubmission,
    ValidationResult,
    validate_profile,
)
from profile_wizard.schemas.profile_draft import ProfileDraft, empty_profile
from profile_wizard.schemas.submission import (
    SubmissionConflict,
    SubmissionCreated,
    SubmissionFailed,
    SubmissionInvalid,
    SubmissionOutcome,
    SubmissionRecord,
    SubmissionResponse,
)

__all__ = [
    # Aggregate
    "ProfileDraft",
    "ProfileSubmission",
    "ValidationResult",
    "empty_profile",
    "validate_profile",
    # Submission
    "SubmissionConflict",
    "SubmissionCreated",
    "SubmissionFailed",
    "SubmissionInvalid",
    "SubmissionOutcome",
    "SubmissionRecord",
    "SubmissionResponse",
]
