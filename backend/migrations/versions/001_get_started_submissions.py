"""Create get_started_submissions table.

Revision ID: 001_get_started_submissions
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from sqlalchemy import inspect

# revision identifiers
revision = "001_get_started_submissions"
down_revision = None
branch_labels = None
depends_on = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if table_exists("get_started_submissions"):
        return

    op.create_table(
        "get_started_submissions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("company", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("role", sa.String(100), nullable=True),
        sa.Column("project_description", sa.Text, nullable=False),
        sa.Column(
            "service_interests",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column(
            "contact_method",
            sa.String(20),
            nullable=False,
            comment="email, phone, video",
        ),
        sa.Column("timeline", sa.String(100), nullable=True),
        sa.Column("budget", sa.String(100), nullable=True),
        sa.Column(
            "assignment_data",
            postgresql.JSONB,
            nullable=True,
            comment="Resolver output, possibly edited by an admin",
        ),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    op.create_index(
        "ix_get_started_submissions_created_at",
        "get_started_submissions",
        ["created_at"],
    )
    op.create_index(
        "ix_get_started_submissions_email",
        "get_started_submissions",
        ["email"],
    )


def downgrade() -> None:
    op.drop_index("ix_get_started_submissions_email", table_name="get_started_submissions")
    op.drop_index("ix_get_started_submissions_created_at", table_name="get_started_submissions")
    op.drop_table("get_started_submissions")
