from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import openai
from openai import OpenAI

from resume_analyzer.config import Settings
from resume_analyzer.errors import (
    InvalidLLMRequestError,
    LLMProviderError,
    QuotaExceededError,
    TransientLLMError,
    UnknownLLMError,
)
from resume_analyzer.llm.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

QUOTA_PHRASES = ("quota", "rate limit", "rate_limit", "too many requests", "resource_exhausted")
QUOTA_CODES = {"insufficient_quota", "rate_limit_exceeded"}
TRANSIENT_PHRASES = ("timed out", "timeout", "connection", "temporarily unavailable", "overloaded")


@dataclass(slots=True)
class ModelResponse:
    content: str
    model: str
    raw: dict[str, Any]


@dataclass(slots=True)
class ProviderConfig:
    name: str
    base_url: str
    api_key: str
    timeout_sec: int
    temperature: float = 0.3
    max_output_tokens: int = 2048
    json_mode: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> ProviderConfig:
        return cls(
            name="openai",
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            timeout_sec=settings.openai_timeout_sec,
            temperature=settings.llm_temperature,
            max_output_tokens=settings.llm_max_output_tokens,
            json_mode=settings.llm_json_mode,
        )


class LLMProvider:
    def __init__(self, config: ProviderConfig):
        self.config = config
        # Retries are owned by the analyzer's model fallback, not the SDK.
        self.client = OpenAI(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=float(config.timeout_sec),
            max_retries=0,
        )

    def complete_text(self, *, model: str, prompt: str) -> ModelResponse:
        try:
            return self._complete(model=model, prompt=prompt, json_mode=self.config.json_mode)
        except Exception as exc:
            if not (self.config.json_mode and self._is_unsupported_json_mode(exc)):
                raise classify_error(exc, model=model) from exc

            logger.warning(
                "JSON output mode rejected by provider=%s model=%s; retrying as plain text (%s)",
                self.config.name,
                model,
                exc,
            )
            try:
                return self._complete(model=model, prompt=prompt, json_mode=False)
            except Exception as retry_exc:
                raise classify_error(retry_exc, model=model) from retry_exc

    def _complete(self, *, model: str, prompt: str, json_mode: bool) -> ModelResponse:
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_output_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(**kwargs)
        raw = response.model_dump() if hasattr(response, "model_dump") else {}
        if not isinstance(raw, dict):
            raw = {"raw": raw}
        raw["json_mode"] = json_mode
        return ModelResponse(content=self._extract_chat_text(response), model=model, raw=raw)

    @staticmethod
    def _extract_chat_text(response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""

        message = getattr(choices[0], "message", None)
        if message is None:
            return ""

        content = getattr(message, "content", "")
        if isinstance(content, str):
            return content
        if content is None:
            return ""
        return str(content)

    @staticmethod
    def _is_unsupported_json_mode(exc: Exception) -> bool:
        if getattr(exc, "status_code", None) not in {400, 422}:
            return False
        message = str(exc).lower()
        return "response_format" in message or "json_object" in message


def classify_error(exc: Exception, *, model: str = "") -> LLMProviderError:
    """Map a provider exception onto the typed failure hierarchy.

    Quota is decided first, from the SDK type, a 429, a quota error code or a
    quota phrase in the message, whatever the status. Only then do status codes
    and transport failures pick between transient and invalid requests.
    """
    if isinstance(exc, LLMProviderError):
        return exc

    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int):
        status_code = getattr(exc, "status", None)
        if not isinstance(status_code, int):
            status_code = None
    code = getattr(exc, "code", None)
    message = str(exc) or type(exc).__name__
    lowered = message.lower()

    quota_code = isinstance(code, str) and code in QUOTA_CODES

    error_cls: type[LLMProviderError]
    if isinstance(exc, openai.RateLimitError) or status_code == 429 or quota_code:
        error_cls = QuotaExceededError
    elif any(phrase in lowered for phrase in QUOTA_PHRASES):
        error_cls = QuotaExceededError
    elif isinstance(exc, openai.APIConnectionError) or (status_code is not None and status_code >= 500):
        error_cls = TransientLLMError
    elif status_code is not None and 400 <= status_code < 500:
        error_cls = InvalidLLMRequestError
    elif isinstance(exc, TimeoutError) or any(phrase in lowered for phrase in TRANSIENT_PHRASES):
        error_cls = TransientLLMError
    else:
        error_cls = UnknownLLMError

    return error_cls(message, model=model, status_code=status_code, details={"code": code})
