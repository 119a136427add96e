"""
Turn an untrusted model payload into a fully populated ``ResumeAnalysis``.

The model output is read field by field into plain Python values, then every
gap is filled with a documented default. Nothing in here raises: a payload
that passed schema validation always normalizes.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, TypeVar

from resume_analyzer.types import (
    DEFAULT_RATING,
    MAX_RATING,
    MIN_RATING,
    NO_SUMMARY,
    NOT_PROVIDED,
    Analysis,
    Certification,
    Education,
    PersonalInfo,
    Project,
    ResumeAnalysis,
    Skills,
    WorkExperience,
)

T = TypeVar("T")

CONTACT_FIELDS = ("name", "email", "phone", "linkedin", "portfolio")


def normalize_analysis(raw: dict[str, Any]) -> ResumeAnalysis:
    personal = _as_dict(raw.get("personalInfo"))
    skills = _as_dict(raw.get("skills"))
    analysis = _as_dict(raw.get("analysis"))

    return ResumeAnalysis(
        personal_info=PersonalInfo(
            **{field: _text_or(personal.get(field), NOT_PROVIDED) for field in CONTACT_FIELDS}
        ),
        summary=_text_or(raw.get("summary"), NO_SUMMARY),
        work_experience=_records(raw.get("workExperience"), _work_experience),
        education=_records(raw.get("education"), _education),
        skills=Skills(
            technical=_string_list(skills.get("technical")),
            soft=_string_list(skills.get("soft")),
        ),
        projects=_records(raw.get("projects"), _project),
        certifications=_records(raw.get("certifications"), _certification),
        analysis=Analysis(
            rating=clamp_rating(analysis.get("rating")),
            strengths=_string_list(analysis.get("strengths")),
            improvement_areas=_string_list(analysis.get("improvementAreas")),
            skill_gaps=_string_list(analysis.get("skillGaps")),
            recommendations=_string_list(analysis.get("recommendations")),
        ),
    )


def clamp_rating(value: Any) -> int:
    """Coerce a model-supplied rating into ``[1, 10]``; absent or junk means 5."""
    if value is None or isinstance(value, bool):
        return DEFAULT_RATING
    if isinstance(value, int):
        # JSON ints are unbounded and may not fit in a float.
        return max(MIN_RATING, min(MAX_RATING, value))
    if isinstance(value, str):
        # "7/10" and "8.5" both show up in practice.
        value = value.strip().split("/")[0].strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_RATING
    if math.isnan(number):
        return DEFAULT_RATING
    if math.isinf(number):
        return MAX_RATING if number > 0 else MIN_RATING
    return max(MIN_RATING, min(MAX_RATING, int(round(number))))


def _work_experience(item: dict[str, Any]) -> WorkExperience:
    return WorkExperience(
        job_title=_text(item.get("jobTitle") or item.get("role") or item.get("title")),
        company=_text(item.get("company")),
        start_date=_text(item.get("startDate")),
        end_date=_text(item.get("endDate")),
        responsibilities=_string_list(item.get("responsibilities") or item.get("description")),
    )


def _education(item: dict[str, Any]) -> Education:
    return Education(
        degree=_text(item.get("degree")),
        institution=_text(item.get("institution")),
        graduation_year=_text(item.get("graduationYear") or item.get("graduation_year")),
        achievements=_string_list(item.get("achievements")),
    )


def _project(item: dict[str, Any]) -> Project:
    return Project(
        name=_text(item.get("name")),
        description=_text(item.get("description")),
        technologies=_string_list(item.get("technologies")),
        role=_text(item.get("role")),
    )


def _certification(item: dict[str, Any]) -> Certification:
    return Certification(
        name=_text(item.get("name")),
        issuer=_text(item.get("issuer")),
        date_obtained=_text(item.get("dateObtained")),
    )


def _records(value: Any, build: Callable[[dict[str, Any]], T]) -> list[T]:
    records: list[T] = []
    for item in _as_list(value):
        if isinstance(item, str):
            if not item.strip():
                continue
            # A bare string is the entry's headline: a title, a degree, a name.
            item = {"name": item, "jobTitle": item, "degree": item}
        if isinstance(item, dict):
            records.append(build(item))
    return records


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    items: list[str] = []
    for item in _as_list(value):
        if isinstance(item, dict):
            item = item.get("name") or item.get("title") or ""
        text = _text(item)
        if text:
            items.append(text)
    return items


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _text_or(value: Any, default: str) -> str:
    return _text(value) or default
