"""Initial schema: content tables, SEO/hero attachments, admins, users, saved jobs, bookmarks.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _content_columns() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title_ar", sa.String(200), nullable=False),
        sa.Column("slug_ar", sa.String(120), nullable=False),
        sa.Column("body_ar", sa.Text, nullable=False),
        sa.Column("sector", sa.String(100), nullable=False),
        sa.Column("region", sa.String(100), nullable=False),
        sa.Column("pdf_url", sa.Text),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _content_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_slug_ar", table, ["slug_ar"], unique=True)
    op.create_index(f"ix_{table}_sector", table, ["sector"])
    op.create_index(f"ix_{table}_region", table, ["region"])
    op.create_index(f"ix_{table}_featured", table, ["featured"])
    op.create_index(f"ix_{table}_published", table, ["published"])


def _attachment_fks() -> list[sa.Column]:
    return [
        sa.Column("job_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("job_competitions.id", ondelete="CASCADE"), unique=True),
        sa.Column("guidance_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("school_guidance.id", ondelete="CASCADE"), unique=True),
        sa.Column("exam_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("exam_calendars.id", ondelete="CASCADE"), unique=True),
    ]


def upgrade() -> None:
    # Job competitions
    op.create_table(
        "job_competitions",
        *_content_columns(),
        sa.Column("closing_date", sa.DateTime(timezone=True)),
    )
    _content_indexes("job_competitions")
    op.create_index("idx_job_published_featured", "job_competitions", ["published", "featured", "created_at"])

    # School guidance
    op.create_table("school_guidance", *_content_columns())
    _content_indexes("school_guidance")
    op.create_index("idx_guidance_published_featured", "school_guidance", ["published", "featured", "created_at"])

    # Exam calendars
    op.create_table(
        "exam_calendars",
        *_content_columns(),
        sa.Column("exam_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("subject", sa.String(100), nullable=False),
        sa.Column("school_level", sa.String(50), nullable=False),
    )
    _content_indexes("exam_calendars")
    op.create_index("ix_exam_calendars_exam_date", "exam_calendars", ["exam_date"])
    op.create_index("ix_exam_calendars_school_level", "exam_calendars", ["school_level"])
    op.create_index("idx_exam_published_featured", "exam_calendars", ["published", "featured", "exam_date"])

    # SEO metadata and hero images
    op.create_table(
        "seo_meta",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(60)),
        sa.Column("description", sa.String(160)),
        *_attachment_fks(),
    )
    op.create_table(
        "hero_images",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("alt_text", sa.String(100), nullable=False),
        *_attachment_fks(),
    )

    # Admins
    op.create_table(
        "admins",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_admins_username", "admins", ["username"], unique=True)
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    # Users
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("preferences", postgresql.JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Saved jobs
    op.create_table(
        "saved_jobs",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("job_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("job_competitions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "job_id", name="uq_saved_jobs_user_job"),
    )
    op.create_index("ix_saved_jobs_user_id", "saved_jobs", ["user_id"])
    op.create_index("ix_saved_jobs_job_id", "saved_jobs", ["job_id"])

    # Bookmarks (target_id points into one of the three content tables)
    op.create_table(
        "bookmarks",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("target_type", sa.String(20), nullable=False),
        sa.Column("target_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_id", "target_type", "target_id", name="uq_bookmarks_user_target"),
    )
    op.create_index("ix_bookmarks_user_id", "bookmarks", ["user_id"])
    op.create_index("idx_bookmarks_target", "bookmarks", ["target_id"])


def downgrade() -> None:
    op.drop_table("bookmarks")
    op.drop_table("saved_jobs")
    op.drop_table("users")
    op.drop_table("admins")
    op.drop_table("hero_images")
    op.drop_table("seo_meta")
    op.drop_table("exam_calendars")
    op.drop_table("school_guidance")
    op.drop_table("job_competitions")
