from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from resume_analyzer.db.repositories import ResumePage
from resume_analyzer.types import MAX_RATING, MIN_RATING, CamelModel, ResumeAnalysis


class ResumeRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    file_size: int
    file_type: str
    status: str
    uploaded_at: datetime
    updated_at: datetime
    name: str | None
    email: str | None
    phone: str | None
    linkedin_url: str | None
    portfolio_url: str | None
    summary: str | None
    work_experience: list[dict[str, Any]]
    education: list[dict[str, Any]]
    technical_skills: list[str]
    soft_skills: list[str]
    projects: list[dict[str, Any]]
    certifications: list[dict[str, Any]]
    resume_rating: int
    improvement_areas: list[str]
    upskill_suggestions: list[str]
    analysis_result: dict[str, Any]


class ResumeUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    summary: str | None = None
    resume_rating: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING)
    status: str | None = Field(default=None, max_length=50)
    analysis_result: dict[str, Any] | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PaginationInfo(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_previous: bool
    next_page: int | None
    previous_page: int | None

    @classmethod
    def from_page(cls, page: ResumePage) -> PaginationInfo:
        return cls(
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_previous=page.has_previous,
            next_page=page.next_page,
            previous_page=page.previous_page,
        )


class ResumeListResponse(BaseModel):
    success: bool = True
    data: list[ResumeRecord]
    pagination: PaginationInfo


class ResumeResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: ResumeRecord


class UploadedAnalysis(ResumeAnalysis):
    id: int


class UploadResponse(BaseModel):
    success: bool = True
    message: str = "Resume analyzed successfully"
    data: UploadedAnalysis


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str
    database: str
    timestamp: str
    environment: str
