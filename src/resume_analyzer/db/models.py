from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from resume_analyzer.db.base import Base, TimestampMixin

JSONType = JSON().with_variant(JSONB(), "postgresql")


class Resume(TimestampMixin, Base):
    __tablename__ = "resumes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    file_type: Mapped[str] = mapped_column(String(100), default="application/pdf", nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="completed", nullable=False)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    portfolio_url: Mapped[str | None] = mapped_column(String(255), nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)

    work_experience: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list, nullable=False)
    education: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list, nullable=False)
    technical_skills: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    soft_skills: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    projects: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list, nullable=False)
    certifications: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list, nullable=False)

    resume_rating: Mapped[int] = mapped_column(Integer, default=5, nullable=False, index=True)
    improvement_areas: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    upskill_suggestions: Mapped[list[str]] = mapped_column(JSONType, default=list, nullable=False)
    analysis_result: Mapped[dict[str, Any]] = mapped_column(JSONType, default=dict, nullable=False)
