from __future__ import annotations

import logging

from resume_analyzer.config import Settings, get_settings


_LOG_CONFIGURED = False


def configure_logging(settings: Settings | None = None) -> None:
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # Request bodies carry resume text; keep client chatter out of INFO logs.
    for noisy in ("httpx", "openai", "pdfminer"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    _LOG_CONFIGURED = True
