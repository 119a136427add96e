from __future__ import annotations

import io
import logging
import re

import pdfplumber
from pdfminer.psparser import PSException
from pdfplumber.utils.exceptions import PdfminerException

from resume_analyzer.errors import (
    EmptyInputError,
    FileTooLargeError,
    NoExtractableTextError,
    TextTooShortError,
    UnreadablePDFError,
)

logger = logging.getLogger(__name__)

MAX_PDF_BYTES = 5 * 1024 * 1024
MAX_PDF_PAGES = 10
MIN_RESUME_CHARS = 50

_INVISIBLE_PATTERN = re.compile("[\u200b-\u200d\u2060\ufeff]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def extract_text(
    data: bytes,
    *,
    max_bytes: int = MAX_PDF_BYTES,
    max_pages: int = MAX_PDF_PAGES,
    min_chars: int = MIN_RESUME_CHARS,
) -> str:
    if not data:
        raise EmptyInputError()
    if len(data) > max_bytes:
        raise FileTooLargeError(len(data), max_bytes)

    raw_text = read_pdf_text(data, max_pages=max_pages)
    if not raw_text.strip():
        raise NoExtractableTextError()

    text = normalize_text(raw_text)
    if len(text) < min_chars:
        raise TextTooShortError(len(text), min_chars)

    logger.info("Extracted %d characters from PDF (%d bytes)", len(text), len(data))
    return text


def read_pdf_text(data: bytes, *, max_pages: int = MAX_PDF_PAGES) -> str:
    """Return the embedded text layer of the first ``max_pages`` pages."""
    parts: list[str] = []
    try:
        with pdfplumber.open(io.BytesIO(data), pages=range(1, max_pages + 1)) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    parts.append(page_text)
    except (PdfminerException, PSException) as exc:
        raise UnreadablePDFError(str(exc) or type(exc).__name__) from exc
    return "\n".join(parts)


def normalize_text(text: str) -> str:
    out = _INVISIBLE_PATTERN.sub("", text)
    out = _WHITESPACE_PATTERN.sub(" ", out)
    return out.strip()
