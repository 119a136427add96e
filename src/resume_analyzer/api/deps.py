from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from resume_analyzer.config import Settings
from resume_analyzer.llm.analyzer import ResumeAnalyzer


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_engine(request: Request) -> Engine:
    return request.app.state.engine


def get_analyzer(request: Request) -> ResumeAnalyzer:
    return request.app.state.analyzer


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
