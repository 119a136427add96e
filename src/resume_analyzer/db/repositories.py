from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from resume_analyzer.db.base import utcnow
from resume_analyzer.db.models import Resume
from resume_analyzer.errors import NoFieldsProvidedError, ResumeNotFoundError
from resume_analyzer.types import ResumeAnalysis

UPDATABLE_FIELDS = (
    "name",
    "email",
    "phone",
    "linkedin_url",
    "portfolio_url",
    "summary",
    "resume_rating",
    "status",
    "analysis_result",
)


@dataclass(slots=True)
class ResumePage:
    items: list[Resume]
    page: int
    limit: int
    total: int
    total_pages: int = field(init=False)
    has_next: bool = field(init=False)
    has_previous: bool = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = math.ceil(self.total / self.limit) if self.limit else 0
        self.has_next = self.page < self.total_pages
        self.has_previous = self.page > 1

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next else None

    @property
    def previous_page(self) -> int | None:
        return self.page - 1 if self.has_previous else None


@dataclass(slots=True)
class NewResume:
    analysis: ResumeAnalysis
    file_name: str
    file_size: int = 0
    file_type: str = "application/pdf"
    status: str = "completed"


def escape_like(value: str, escape: str = "\\") -> str:
    return (
        value.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


def build_resume_row(item: NewResume) -> Resume:
    analysis = item.analysis
    wire = analysis.to_wire()
    personal = analysis.personal_info
    return Resume(
        file_name=item.file_name,
        file_size=item.file_size,
        file_type=item.file_type,
        status=item.status,
        name=personal.name,
        email=personal.email,
        phone=personal.phone,
        linkedin_url=personal.linkedin,
        portfolio_url=personal.portfolio,
        summary=analysis.summary,
        work_experience=wire["workExperience"],
        education=wire["education"],
        technical_skills=wire["skills"]["technical"],
        soft_skills=wire["skills"]["soft"],
        projects=wire["projects"],
        certifications=wire["certifications"],
        resume_rating=analysis.analysis.rating,
        improvement_areas=wire["analysis"]["improvementAreas"],
        upskill_suggestions=wire["analysis"]["recommendations"],
        analysis_result=wire["analysis"],
    )


class ResumeRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        analysis: ResumeAnalysis,
        *,
        file_name: str,
        file_size: int,
        file_type: str = "application/pdf",
    ) -> Resume:
        resume = build_resume_row(
            NewResume(analysis=analysis, file_name=file_name, file_size=file_size, file_type=file_type)
        )
        self.session.add(resume)
        self.session.commit()
        self.session.refresh(resume)
        return resume

    def create_many(self, items: Iterable[NewResume]) -> list[Resume]:
        """Insert several resumes in one transaction; nothing is kept if any insert fails."""
        rows = [build_resume_row(item) for item in items]
        try:
            self.session.add_all(rows)
            self.session.flush()
        except Exception:
            self.session.rollback()
            raise
        self.session.commit()
        for row in rows:
            self.session.refresh(row)
        return rows

    def get(self, resume_id: int) -> Resume:
        resume = self.session.get(Resume, resume_id)
        if resume is None:
            raise ResumeNotFoundError(resume_id)
        return resume

    def exists_by_file_name(self, file_name: str) -> bool:
        statement = select(Resume.id).where(Resume.file_name == file_name).limit(1)
        return self.session.scalar(statement) is not None

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(Resume)) or 0

    def list_page(self, *, page: int = 1, limit: int = 10, search: str = "") -> ResumePage:
        page = max(page, 1)
        limit = max(limit, 1)

        conditions = []
        term = search.strip()
        if term:
            pattern = f"%{escape_like(term)}%"
            conditions.append(
                or_(
                    Resume.file_name.ilike(pattern, escape="\\"),
                    Resume.name.ilike(pattern, escape="\\"),
                )
            )

        total = self.session.scalar(select(func.count()).select_from(Resume).where(*conditions)) or 0
        statement = (
            select(Resume)
            .where(*conditions)
            .order_by(Resume.uploaded_at.desc(), Resume.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        items = list(self.session.scalars(statement).all())
        return ResumePage(items=items, page=page, limit=limit, total=total)

    def update(self, resume_id: int, values: Mapping[str, Any]) -> Resume:
        resume = self.get(resume_id)

        changes = {key: value for key, value in values.items() if key in UPDATABLE_FIELDS}
        if not changes:
            raise NoFieldsProvidedError(list(UPDATABLE_FIELDS))

        for key, value in changes.items():
            setattr(resume, key, value)
        resume.updated_at = utcnow()

        self.session.commit()
        self.session.refresh(resume)
        return resume

    def delete(self, resume_id: int) -> None:
        result = self.session.execute(delete(Resume).where(Resume.id == resume_id))
        if result.rowcount == 0:
            self.session.rollback()
            raise ResumeNotFoundError(resume_id)
        self.session.commit()
