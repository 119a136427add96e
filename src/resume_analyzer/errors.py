"""
Exception hierarchy for the resume analyzer.

Every failure a request can end in is a subclass of ``ResumeAnalyzerError``
carrying a human-readable ``message`` and a ``details`` dict. The API layer
maps each class to an HTTP status in ``resume_analyzer.api.exception_handlers``.
"""

from __future__ import annotations

from typing import Any


class ResumeAnalyzerError(Exception):
    """Base exception for all resume analyzer errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"{self.message} (caused by: {self.__cause__})"
        return self.message


# Upload validation


class UploadValidationError(ResumeAnalyzerError):
    """The upload request itself is unusable."""


class MissingFileError(UploadValidationError):
    def __init__(self) -> None:
        super().__init__("No file uploaded. Please upload a PDF file.")


class UnsupportedFileTypeError(UploadValidationError):
    def __init__(self, content_type: str | None):
        super().__init__(
            "Unsupported file type. Please upload a PDF file.",
            details={"content_type": content_type},
        )


# PDF extraction


class PDFExtractionError(ResumeAnalyzerError):
    """Base class for failures turning PDF bytes into resume text."""


class EmptyInputError(PDFExtractionError):
    def __init__(self) -> None:
        super().__init__("Empty file provided")


class FileTooLargeError(PDFExtractionError):
    def __init__(self, size: int, limit: int):
        super().__init__(
            f"File size exceeds the maximum limit of {limit // (1024 * 1024)}MB",
            details={"size": size, "limit": limit},
        )


class UnreadablePDFError(PDFExtractionError):
    def __init__(self, reason: str):
        super().__init__(f"Failed to read PDF: {reason}", details={"reason": reason})


class NoExtractableTextError(PDFExtractionError):
    def __init__(self) -> None:
        super().__init__(
            "No text content found in PDF. The file may be scanned or contain only images."
        )


class TextTooShortError(PDFExtractionError):
    def __init__(self, length: int, minimum: int):
        super().__init__(
            "Extracted text is too short to be a valid resume",
            details={"length": length, "minimum": minimum},
        )


# LLM analysis


class AnalysisError(ResumeAnalyzerError):
    """Base class for failures while analyzing resume text with an LLM."""


class LLMConfigurationError(AnalysisError):
    pass


class LLMProviderError(AnalysisError):
    """A call to the model provider failed."""

    def __init__(
        self,
        message: str,
        *,
        model: str = "",
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged = {"model": model, "status_code": status_code}
        merged.update(details or {})
        super().__init__(message, details=merged)
        self.model = model
        self.status_code = status_code


class QuotaExceededError(LLMProviderError):
    """Rate limit or usage quota hit. The only failure that triggers model fallback."""


class TransientLLMError(LLMProviderError):
    """Timeouts, connection drops and 5xx responses."""


class InvalidLLMRequestError(LLMProviderError):
    """The provider rejected the request (bad model name, auth, malformed input)."""


class UnknownLLMError(LLMProviderError):
    pass


class ResponseParseError(AnalysisError):
    """The model answered but the answer is not the JSON document we asked for."""


class UnparsableResponseError(ResponseParseError):
    def __init__(self, preview: str = ""):
        super().__init__(
            "Invalid response format from model: Could not extract JSON",
            details={"preview": preview},
        )


class MalformedJSONError(ResponseParseError):
    def __init__(self, reason: str):
        super().__init__(f"Failed to parse model response: {reason}", details={"reason": reason})


class InvalidSchemaError(ResponseParseError):
    def __init__(self, missing: list[str]):
        super().__init__(
            "Invalid response structure from model: Missing required fields",
            details={"missing": missing},
        )


class AllModelsFailedError(AnalysisError):
    def __init__(self, primary_model: str, fallback_model: str, primary_error: str, fallback_error: str):
        super().__init__(
            f"LLM analysis failed on both models ({primary_model}, {fallback_model})",
            details={
                "primary_model": primary_model,
                "fallback_model": fallback_model,
                "primary_error": primary_error,
                "fallback_error": fallback_error,
            },
        )


# Persistence


class PersistenceError(ResumeAnalyzerError):
    pass


class ResumeNotFoundError(PersistenceError):
    def __init__(self, resume_id: int):
        super().__init__("Resume not found", details={"resume_id": resume_id})


class NoFieldsProvidedError(PersistenceError):
    def __init__(self, allowed: list[str]):
        super().__init__(
            "No valid fields provided for update",
            details={"allowed_fields": allowed},
        )
