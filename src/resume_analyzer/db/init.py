from __future__ import annotations

import logging

from sqlalchemy import Engine

from resume_analyzer.db.base import Base
from resume_analyzer.db import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_database(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("resumes table ready")


def reset_database(engine: Engine) -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("resumes table dropped and recreated")
