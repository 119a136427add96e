"""Resumes table with extracted contact fields and JSON analysis columns

Revision ID: 0001_resumes
Revises:
Create Date: 2026-10-19 09:30:00

"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "0001_resumes"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# JSONB on PostgreSQL, plain JSON elsewhere.
JSON_COLUMN = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
JSON_FIELDS = (
    "work_experience",
    "education",
    "technical_skills",
    "soft_skills",
    "projects",
    "certifications",
)


def upgrade() -> None:
    op.create_table(
        "resumes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.Column("file_type", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("linkedin_url", sa.String(length=255), nullable=True),
        sa.Column("portfolio_url", sa.String(length=255), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        *(sa.Column(field, JSON_COLUMN, nullable=False) for field in JSON_FIELDS),
        sa.Column("resume_rating", sa.Integer(), nullable=False),
        sa.Column("improvement_areas", JSON_COLUMN, nullable=False),
        sa.Column("upskill_suggestions", JSON_COLUMN, nullable=False),
        sa.Column("analysis_result", JSON_COLUMN, nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_resumes_email"), "resumes", ["email"], unique=False)
    op.create_index(op.f("ix_resumes_resume_rating"), "resumes", ["resume_rating"], unique=False)
    op.create_index(op.f("ix_resumes_uploaded_at"), "resumes", ["uploaded_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_resumes_uploaded_at"), table_name="resumes")
    op.drop_index(op.f("ix_resumes_resume_rating"), table_name="resumes")
    op.drop_index(op.f("ix_resumes_email"), table_name="resumes")
    op.drop_table("resumes")
