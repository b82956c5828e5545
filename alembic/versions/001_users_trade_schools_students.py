"""Initial migration: users, trade_schools and students tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import ARRAY, UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # Create trade_schools table
    op.create_table(
        "trade_schools",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", UUID(as_uuid=True), unique=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("programs", ARRAY(sa.String), nullable=False),
        sa.Column("website", sa.String(500), nullable=False),
        sa.Column("accredited", sa.Boolean, nullable=False, server_default="true"),
        *_timestamps(),
    )
    op.create_index("ix_trade_schools_name", "trade_schools", ["name"])
    op.create_index("ix_trade_schools_programs", "trade_schools", ["programs"], postgresql_using="gin")

    # Create students table
    op.create_table(
        "students",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("enrolled_program", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="enrolled"),
        sa.Column("enrollment_date", sa.Date, nullable=False, server_default=sa.func.current_date()),
        sa.Column(
            "school_uuid",
            UUID(as_uuid=True),
            sa.ForeignKey("trade_schools.uuid", ondelete="CASCADE"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_students_school_uuid", "students", ["school_uuid"])
    op.create_index("ix_students_last_first", "students", ["last_name", "first_name"])
    op.create_index("ix_students_status", "students", ["status"])


def downgrade() -> None:
    op.drop_table("students")
    op.drop_table("trade_schools")
    op.drop_table("users")
