"""SQLAlchemy ORM models for the profile wizard.

- base.py: Base, TimestampMixin
- submission.py: Submission
"""

from profile_wizard.models.base import Base, TimestampMixin
from profile_wizard.models.submission import Submission

__all__ = [
    "Base",
    "Submission",
    "TimestampMixin",
]
