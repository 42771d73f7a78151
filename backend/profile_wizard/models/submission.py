"""Submission model - one stored profile per email address.

The flat profile aggregate maps onto scalar columns; each collection is a
JSONB array of wire-format (camelCase) objects, exactly as submitted.
"""

import uuid
from typing import Any

from sqlalchemy import Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from profile_wizard.models.base import Base, TimestampMixin

_DEFAULT_UUID = text("gen_random_uuid()")
_DEFAULT_EMPTY_JSONB = text("'[]'::jsonb")


class Submission(Base, TimestampMixin):
    """A completed profile submission.

    Attributes:
        id: UUID primary key.
        email: Unique, stored lowercase.
        skills, languages, experiences, education: JSONB arrays of objects.
        interests, hobbies: JSONB arrays of strings.
        created_at: Submission timestamp (from TimestampMixin).
    """

    __tablename__ = "submissions"
    __table_args__ = (Index("idx_submission_email", "email", unique=True),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        server_default=_DEFAULT_UUID,
    )

    # Identity / contact
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    # Address
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(255), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(50), nullable=False)
    country: Mapped[str] = mapped_column(String(255), nullable=False)

    # Social links
    website: Mapped[str | None] = mapped_column(Text(), nullable=True)
    facebook: Mapped[str | None] = mapped_column(Text(), nullable=True)
    instagram: Mapped[str | None] = mapped_column(Text(), nullable=True)
    linkedin: Mapped[str | None] = mapped_column(Text(), nullable=True)

    # Collections (JSONB arrays)
    skills: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, server_default=_DEFAULT_EMPTY_JSONB, nullable=False
    )
    languages: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, server_default=_DEFAULT_EMPTY_JSONB, nullable=False
    )
    interests: Mapped[list[str]] = mapped_column(
        JSONB, server_default=_DEFAULT_EMPTY_JSONB, nullable=False
    )
    hobbies: Mapped[list[str]] = mapped_column(
        JSONB, server_default=_DEFAULT_EMPTY_JSONB, nullable=False
    )
    experiences: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, server_default=_DEFAULT_EMPTY_JSONB, nullable=False
    )
    education: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONB, server_default=_DEFAULT_EMPTY_JSONB, nullable=False
    )
