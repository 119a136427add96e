from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NOT_PROVIDED = "Not provided"
NO_SUMMARY = "No summary provided"
DEFAULT_RATING = 5
MIN_RATING = 1
MAX_RATING = 10


def is_provided(value: str | None) -> bool:
    """True when a contact field holds real data rather than the placeholder."""
    return bool(value) and value.strip() != NOT_PROVIDED


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(CamelModel):
    name: str = NOT_PROVIDED
    email: str = NOT_PROVIDED
    phone: str = NOT_PROVIDED
    linkedin: str = NOT_PROVIDED
    portfolio: str = NOT_PROVIDED

    def missing_fields(self) -> list[str]:
        return [field for field, value in self.model_dump().items() if not is_provided(value)]


class WorkExperience(CamelModel):
    job_title: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: list[str] = Field(default_factory=list)


class Education(CamelModel):
    degree: str = ""
    institution: str = ""
    graduation_year: str = ""
    achievements: list[str] = Field(default_factory=list)


class Project(CamelModel):
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    role: str = ""


class Certification(CamelModel):
    name: str = ""
    issuer: str = ""
    date_obtained: str = ""


class Skills(CamelModel):
    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)


class Analysis(CamelModel):
    rating: int = Field(default=DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING)
    strengths: list[str] = Field(default_factory=list)
    improvement_areas: list[str] = Field(default_factory=list)
    skill_gaps: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ResumeAnalysis(CamelModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: str = NO_SUMMARY
    work_experience: list[WorkExperience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    analysis: Analysis = Field(default_factory=Analysis)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
