from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from typing import Any

from resume_analyzer.errors import InvalidSchemaError, MalformedJSONError, UnparsableResponseError

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("personalInfo", "workExperience")

_FENCE_PATTERN = re.compile(r"```(?:json|JSON)?")
_SMART_QUOTES = str.maketrans({"\u201c": '"', "\u201d": '"', "\u2018": "'", "\u2019": "'"})


def parse_model_json(content: str) -> dict[str, Any]:
    """Pull the first JSON object out of a model reply.

    Cleanup is applied in stages and each stage is only tried when the previous,
    less modified candidate failed, so replies that are already valid JSON are
    never rewritten.
    """
    found_span = False
    last_error = ""
    for candidate in _cleanup_candidates(content):
        for span in iter_json_objects(candidate):
            found_span = True
            try:
                value = json.loads(span)
            except ValueError as exc:
                # JSONDecodeError, or an int literal past the digit limit.
                last_error = str(exc)
                continue
            if isinstance(value, dict):
                return value
            last_error = f"expected a JSON object, got {type(value).__name__}"

    if not found_span:
        logger.warning("Could not extract JSON from model response: %.300s", content)
        raise UnparsableResponseError(content[:300])
    logger.warning("Model response contained malformed JSON: %s", last_error)
    raise MalformedJSONError(last_error)


def validate_schema(payload: dict[str, Any]) -> dict[str, Any]:
    missing = [key for key in REQUIRED_SECTIONS if payload.get(key) is None]
    if missing:
        raise InvalidSchemaError(missing)
    return payload


def find_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span, ignoring braces inside strings."""
    return next(iter_json_objects(text), None)


def iter_json_objects(text: str) -> Iterator[str]:
    """Yield top-level balanced ``{...}`` spans from left to right.

    Scanning resumes after the end of each yielded span, so objects nested in an
    earlier span are never yielded on their own.
    """
    start = text.find("{")
    while start != -1:
        end = _matching_brace(text, start)
        if end is None:
            start = text.find("{", start + 1)
            continue
        yield text[start : end + 1]
        start = text.find("{", end + 1)


def _matching_brace(text: str, start: int) -> int | None:
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def _cleanup_candidates(content: str) -> list[str]:
    stripped = _FENCE_PATTERN.sub("", content.strip()).strip()
    requoted = stripped.translate(_SMART_QUOTES)
    unescaped = requoted.replace('\\"', '"').replace("\\'", "'")

    candidates: list[str] = []
    for candidate in (stripped, requoted, unescaped):
        if candidate not in candidates:
            candidates.append(candidate)
    return candidates
