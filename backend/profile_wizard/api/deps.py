"""Shared dependencies for API endpoints.

WHY DEPENDENCY INJECTION:
- The router never constructs its own storage or mailer
- Tests swap the record store and notification sender through
  ``app.dependency_overrides`` without touching a database or Resend
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from profile_wizard.core.database import get_db
from profile_wizard.core.email import NotificationSender, ResendEmailSender
from profile_wizard.repositories.submission_repository import SqlRecordStore
from profile_wizard.services.submission_service import (
    RecordStore,
    SubmissionService,
)

DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_record_store(db: DbSession) -> RecordStore:
    """Record store bound to the request's database session."""
    return SqlRecordStore(db)


def get_notification_sender() -> NotificationSender:
    """Confirmation mailer configured from settings."""
    return ResendEmailSender()


def get_submission_service(
    store: Annotated[RecordStore, Depends(get_record_store)],
    notifier: Annotated[NotificationSender, Depends(get_notification_sender)],
) -> SubmissionService:
    """Submission service wired to the request's store and mailer."""
    return SubmissionService(store, notifier)


SubmissionServiceDep = Annotated[SubmissionService, Depends(get_submission_service)]
