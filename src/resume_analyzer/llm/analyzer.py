from __future__ import annotations

import logging
from typing import Protocol

from resume_analyzer.config import Settings, get_settings
from resume_analyzer.core.normalizer import normalize_analysis
from resume_analyzer.errors import (
    AllModelsFailedError,
    LLMConfigurationError,
    QuotaExceededError,
)
from resume_analyzer.llm.parsing import parse_model_json, validate_schema
from resume_analyzer.llm.prompts import build_analysis_prompt
from resume_analyzer.llm.providers import LLMProvider, ModelResponse, ProviderConfig, classify_error
from resume_analyzer.types import ResumeAnalysis

logger = logging.getLogger(__name__)


class TextCompletionProvider(Protocol):
    def complete_text(self, *, model: str, prompt: str) -> ModelResponse: ...


class ResumeAnalyzer:
    def __init__(self, settings: Settings | None = None, provider: TextCompletionProvider | None = None):
        self.settings = settings or get_settings()
        self._provider = provider

    @property
    def provider(self) -> TextCompletionProvider:
        if self._provider is None:
            if not self.settings.openai_api_key:
                raise LLMConfigurationError("LLM API key is not configured (set OPENAI_API_KEY)")
            self._provider = LLMProvider(ProviderConfig.from_settings(self.settings))
        return self._provider

    @property
    def primary_model(self) -> str:
        return self.settings.openai_model_primary

    @property
    def fallback_model(self) -> str:
        return self.settings.openai_model_fallback

    def analyze(self, text: str) -> ResumeAnalysis:
        prompt = build_analysis_prompt(text, self.settings.max_prompt_chars)
        provider = self.provider

        try:
            result = self._analyze_with_model(provider, self.primary_model, prompt)
        except QuotaExceededError as primary_exc:
            logger.warning(
                "Quota or rate limit on model=%s, retrying once with fallback model=%s",
                self.primary_model,
                self.fallback_model,
            )
            try:
                result = self._analyze_with_model(provider, self.fallback_model, prompt)
            except Exception as fallback_exc:
                logger.error(
                    "Both models failed primary=%s (%s) fallback=%s (%s)",
                    self.primary_model,
                    primary_exc,
                    self.fallback_model,
                    fallback_exc,
                )
                raise AllModelsFailedError(
                    self.primary_model,
                    self.fallback_model,
                    str(primary_exc),
                    str(fallback_exc),
                ) from fallback_exc
            logger.info("Resume analysis completed with fallback model=%s", self.fallback_model)
            return result

        logger.info("Resume analysis completed with primary model=%s", self.primary_model)
        return result

    def _analyze_with_model(
        self,
        provider: TextCompletionProvider,
        model: str,
        prompt: str,
    ) -> ResumeAnalysis:
        logger.info("Sending resume analysis request model=%s prompt_chars=%d", model, len(prompt))
        try:
            response = provider.complete_text(model=model, prompt=prompt)
        except Exception as exc:
            error = classify_error(exc, model=model)
            if error is exc:
                raise
            raise error from exc
        logger.debug("Raw model response model=%s: %.200s", model, response.content)

        payload = validate_schema(parse_model_json(response.content))
        return normalize_analysis(payload)
