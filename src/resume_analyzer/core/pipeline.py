from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from resume_analyzer.config import Settings
from resume_analyzer.core.pdf_extractor import extract_text
from resume_analyzer.db.models import Resume
from resume_analyzer.db.repositories import ResumeRepository
from resume_analyzer.errors import UnsupportedFileTypeError
from resume_analyzer.llm.analyzer import ResumeAnalyzer
from resume_analyzer.types import ResumeAnalysis

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = {"application/pdf"}


@dataclass(slots=True)
class UploadedResume:
    file_name: str
    content_type: str | None
    data: bytes


def check_content_type(content_type: str | None) -> None:
    if (content_type or "").split(";")[0].strip().lower() not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFileTypeError(content_type)


def analyze_pdf(data: bytes, *, analyzer: ResumeAnalyzer, settings: Settings) -> ResumeAnalysis:
    """Extract text from PDF bytes and run the LLM analysis over it."""
    text = extract_text(
        data,
        max_bytes=settings.max_upload_bytes,
        max_pages=settings.max_pdf_pages,
        min_chars=settings.min_resume_chars,
    )
    return analyzer.analyze(text)


def process_upload(
    upload: UploadedResume,
    *,
    db: Session,
    analyzer: ResumeAnalyzer,
    settings: Settings,
) -> tuple[Resume, ResumeAnalysis]:
    """Validate, analyze and store one uploaded resume.

    The row is written only after the normalized analysis exists, so a failure
    at any earlier stage leaves the table untouched.
    """
    check_content_type(upload.content_type)
    logger.info("Processing upload file=%s size=%d", upload.file_name, len(upload.data))

    analysis = analyze_pdf(upload.data, analyzer=analyzer, settings=settings)
    record = ResumeRepository(db).create(
        analysis,
        file_name=upload.file_name,
        file_size=len(upload.data),
        file_type=upload.content_type or "application/pdf",
    )
    logger.info("Stored resume id=%s rating=%s", record.id, record.resume_rating)
    return record, analysis
