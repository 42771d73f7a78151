"""Repository for Submission persistence.

``SubmissionRepository`` follows the stateless pattern: static methods that
take the caller's AsyncSession. ``SqlRecordStore`` wraps it as the
``RecordStore`` the submission service depends on, adding the
create-unless-duplicate semantics.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from profile_wizard.models.submission import Submission
from profile_wizard.schemas.profile import ProfileSubmission
from profile_wizard.schemas.submission import SubmissionRecord

logger = logging.getLogger(__name__)

_COLLECTION_FIELDS = (
    "skills",
    "languages",
    "interests",
    "hobbies",
    "experiences",
    "education",
)


class SubmissionRepository:
    """Stateless repository for Submission table operations.

    All methods are static: no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Submission | None:
        """Fetch a submission by email address (case-insensitive).

        Args:
            db: Async database session.
            email: Email address to look up.

        Returns:
            Submission if found, None otherwise.
        """
        stmt = select(Submission).where(Submission.email == email.lower())
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(db: AsyncSession, profile: ProfileSubmission) -> Submission:
        """Insert a validated profile.

        Email is normalized to lowercase before storage. Collections are
        stored in their wire (camelCase) shape.

        Args:
            db: Async database session.
            profile: Validated profile.

        Returns:
            Created Submission with database-generated fields populated.

        Raises:
            sqlalchemy.exc.IntegrityError: If the email already exists.
        """
        collections = profile.model_dump(
            by_alias=True, mode="json", include=set(_COLLECTION_FIELDS)
        )
        submission = Submission(
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email.lower(),
            phone=profile.phone,
            street=profile.street,
            city=profile.city,
            state=profile.state,
            postal_code=profile.postal_code,
            country=profile.country,
            website=profile.website,
            facebook=profile.facebook,
            instagram=profile.instagram,
            linkedin=profile.linkedin,
            **collections,
        )
        db.add(submission)
        await db.flush()
        await db.refresh(submission)
        return submission


def to_record(submission: Submission) -> SubmissionRecord:
    """Convert an ORM row into the API-facing record."""
    values = {
        column.name: getattr(submission, column.name)
        for column in Submission.__table__.columns
    }
    return SubmissionRecord.model_validate(values)


class SqlRecordStore:
    """RecordStore backed by the submissions table.

    Uniqueness is enforced by the unique index on ``submissions.email``.
    The insert runs in a savepoint so a duplicate leaves the session usable.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def create_unique(self, profile: ProfileSubmission) -> SubmissionRecord | None:
        """Store a profile unless its email is already taken.

        Returns:
            The stored record, or None on a duplicate email.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: On any other database failure.
        """
        try:
            async with self._db.begin_nested():
                submission = await SubmissionRepository.create(self._db, profile)
        except IntegrityError:
            logger.info("Submission email already exists")
            return None
        await self._db.commit()
        return to_record(submission)
