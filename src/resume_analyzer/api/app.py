from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from resume_analyzer.api.exception_handlers import register_exception_handlers
from resume_analyzer.api.routes import router as api_router
from resume_analyzer.config import Settings, get_settings
from resume_analyzer.db.init import init_database
from resume_analyzer.db.session import create_db_engine, create_session_factory
from resume_analyzer.llm.analyzer import ResumeAnalyzer
from resume_analyzer.logging_config import configure_logging

logger = logging.getLogger(__name__)


class SPAStaticFiles(StaticFiles):
    """Static files that fall back to ``index.html`` so client-side routes resolve."""

    async def get_response(self, path: str, scope):
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


def create_app(settings: Settings | None = None, analyzer: ResumeAnalyzer | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        engine = create_db_engine(settings)
        init_database(engine)
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        logger.info("Database ready backend=%s env=%s", engine.url.get_backend_name(), settings.app_env)
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.analyzer = analyzer or ResumeAnalyzer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router)

    if settings.serve_static:
        if settings.static_dir.is_dir():
            app.mount("/", SPAStaticFiles(directory=str(settings.static_dir), html=True), name="static")
        else:
            logger.warning("Static directory %s not found; frontend will not be served", settings.static_dir)
    return app
