"""
Exception handlers for the FastAPI application.

Every error body has the shape ``{"success": false, "error": "<message>"}``.
Unexpected errors also echo the exception text as ``message`` in development.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from resume_analyzer.errors import (
    AnalysisError,
    EmptyInputError,
    FileTooLargeError,
    LLMConfigurationError,
    NoFieldsProvidedError,
    PDFExtractionError,
    PersistenceError,
    ResumeAnalyzerError,
    ResumeNotFoundError,
    UploadValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins.
STATUS_MAP: tuple[tuple[type[ResumeAnalyzerError], int], ...] = (
    (UploadValidationError, status.HTTP_400_BAD_REQUEST),
    (EmptyInputError, status.HTTP_400_BAD_REQUEST),
    (FileTooLargeError, status.HTTP_400_BAD_REQUEST),
    (PDFExtractionError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ResumeNotFoundError, status.HTTP_404_NOT_FOUND),
    (NoFieldsProvidedError, status.HTTP_400_BAD_REQUEST),
    (LLMConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (AnalysisError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: ResumeAnalyzerError) -> int:
    for exc_type, status_code in STATUS_MAP:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _is_development(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return settings is not None and settings.app_env == "development"


def error_response(
    request: Request, status_code: int, error: str, exc: Exception | None = None
) -> JSONResponse:
    content: dict[str, object] = {"success": False, "error": error}
    if exc is not None and _is_development(request):
        content["message"] = str(exc)
    return JSONResponse(status_code=status_code, content=content)


async def resume_analyzer_exception_handler(request: Request, exc: ResumeAnalyzerError) -> JSONResponse:
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "%s on %s %s: %s details=%s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc,
        exc.details,
    )
    return error_response(request, status_code, exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid value')}"
        for error in exc.errors()
    )
    logger.warning("Request validation failed on %s %s: %s", request.method, request.url.path, problems)
    return error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, f"Invalid request: {problems}")


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error", exc)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!", exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResumeAnalyzerError, resume_analyzer_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
