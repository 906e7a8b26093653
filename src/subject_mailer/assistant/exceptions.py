"""
Exceptions raised by the subject classifier and the email drafter.

Classification errors always propagate to the caller. Drafting failures are
recovered with the fallback generator; only the drafter's precondition
(InvalidSubjectError) is ever raised from it.
"""

from typing import Any


class AssistantError(Exception):
    """Base exception for classifier/drafter errors."""
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ClassificationError(AssistantError):
    """Base for failures that leave no usable SubjectAnalysis."""
    pass


class EmptyResponseError(ClassificationError):
    """The model returned no content for a classification request."""
    pass


class MalformedOutputError(ClassificationError):
    """
    The model returned content that is not JSON.
    
    The original json.JSONDecodeError is chained as __cause__.
    """
    
    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        details = {}
        if raw_content:
            # First 500 chars only, avoid excessive logging
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error
        super().__init__(message, details)


class ClassificationFailedError(ClassificationError):
    """
    Transport or provider failure (network, auth, timeout, rate limit).
    
    The LLM client exception is chained as __cause__. No retry is attempted.
    """
    pass


class InvalidSubjectError(AssistantError):
    """The drafter was given a subject that is blank after trimming."""
    pass


class NoAnalysisError(AssistantError):
    """An email was requested before any subject was analyzed."""
    pass
