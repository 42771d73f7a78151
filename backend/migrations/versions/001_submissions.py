"""Create the submissions table.

Revision ID: 001_submissions
Revises: 000_enable_extensions
Create Date: 2026-10-19

One row per completed profile. The unique index on email is what makes
concurrent duplicate submissions resolve to one insert and one conflict.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_submissions"
down_revision: str | None = "000_enable_extensions"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_EMPTY_JSONB = sa.text("'[]'::jsonb")


def _jsonb_array(name: str) -> sa.Column:
    return sa.Column(
        name, postgresql.JSONB(), nullable=False, server_default=_EMPTY_JSONB
    )


def upgrade() -> None:
    op.create_table(
        "submissions",
        sa.Column(
            "id",
            sa.UUID(),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        # Identity / contact
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        # Address
        sa.Column("street", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("state", sa.String(255), nullable=False),
        sa.Column("postal_code", sa.String(50), nullable=False),
        sa.Column("country", sa.String(255), nullable=False),
        # Social links
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("facebook", sa.Text(), nullable=True),
        sa.Column("instagram", sa.Text(), nullable=True),
        sa.Column("linkedin", sa.Text(), nullable=True),
        # Collections
        _jsonb_array("skills"),
        _jsonb_array("languages"),
        _jsonb_array("interests"),
        _jsonb_array("hobbies"),
        _jsonb_array("experiences"),
        _jsonb_array("education"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_submission_email", "submissions", ["email"], unique=True
    )


def downgrade() -> None:
    op.drop_index("idx_submission_email")
    op.drop_table("submissions")
