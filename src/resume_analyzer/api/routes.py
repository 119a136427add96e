from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from resume_analyzer.api.deps import get_analyzer, get_app_settings, get_db, get_engine
from resume_analyzer.api.schemas import (
    HealthResponse,
    MessageResponse,
    PaginationInfo,
    ResumeListResponse,
    ResumeRecord,
    ResumeResponse,
    ResumeUpdateRequest,
    UploadedAnalysis,
    UploadResponse,
)
from resume_analyzer.config import Settings
from resume_analyzer.core.pipeline import UploadedResume, check_content_type, process_upload
from resume_analyzer.db.base import utcnow
from resume_analyzer.db.repositories import ResumeRepository
from resume_analyzer.db.session import check_connection
from resume_analyzer.errors import MissingFileError
from resume_analyzer.llm.analyzer import ResumeAnalyzer

router = APIRouter(prefix="/api", tags=["api"])

MAX_PAGE_SIZE = 100


@router.get("/health", response_model=HealthResponse)
def health(
    engine: Engine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    return HealthResponse(
        status="ok",
        message="Server is running",
        database="connected" if check_connection(engine) else "disconnected",
        timestamp=utcnow().isoformat(),
        environment=settings.app_env,
    )


@router.post("/resumes/upload", response_model=UploadResponse, status_code=201)
async def upload_resume(
    file: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    analyzer: ResumeAnalyzer = Depends(get_analyzer),
    settings: Settings = Depends(get_app_settings),
) -> UploadResponse:
    if file is None or not file.filename:
        raise MissingFileError()
    check_content_type(file.content_type)

    # One byte past the limit is enough to reject oversized files.
    data = await file.read(settings.max_upload_bytes + 1)
    upload = UploadedResume(file_name=file.filename, content_type=file.content_type, data=data)
    record, analysis = await run_in_threadpool(
        process_upload, upload, db=db, analyzer=analyzer, settings=settings
    )
    return UploadResponse(data=UploadedAnalysis(id=record.id, **analysis.model_dump()))


@router.get("/resumes", response_model=ResumeListResponse)
def list_resumes(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=MAX_PAGE_SIZE),
    search: str = Query(default=""),
    db: Session = Depends(get_db),
) -> ResumeListResponse:
    result = ResumeRepository(db).list_page(page=page, limit=limit, search=search)
    return ResumeListResponse(
        data=[ResumeRecord.model_validate(row) for row in result.items],
        pagination=PaginationInfo.from_page(result),
    )


@router.get("/resumes/{resume_id}", response_model=ResumeResponse)
def get_resume(resume_id: int, db: Session = Depends(get_db)) -> ResumeResponse:
    resume = ResumeRepository(db).get(resume_id)
    return ResumeResponse(data=ResumeRecord.model_validate(resume))


@router.put("/resumes/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: int,
    payload: ResumeUpdateRequest,
    db: Session = Depends(get_db),
) -> ResumeResponse:
    resume = ResumeRepository(db).update(resume_id, payload.changes())
    return ResumeResponse(message="Resume updated successfully", data=ResumeRecord.model_validate(resume))


@router.delete("/resumes/{resume_id}", response_model=MessageResponse)
def delete_resume(resume_id: int, db: Session = Depends(get_db)) -> MessageResponse:
    ResumeRepository(db).delete(resume_id)
    return MessageResponse(message="Resume deleted successfully")
