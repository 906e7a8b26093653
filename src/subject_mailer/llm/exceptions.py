"""
Errors raised by LLM clients.

Everything a provider call can fail with is an LLMClientError, so the
classifier can wrap any of them into ClassificationFailedError and the
drafter can fall back on any of them. Content problems (empty or non-JSON
text) are not raised here; they are judged by the caller.
"""

from typing import Any, Optional


class LLMClientError(Exception):
    """
    Base class for provider call failures.

    ``retryable`` tells the client's attempt loop whether another attempt
    could succeed; it never changes what the caller sees.
    """

    retryable = False

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        retryable: Optional[bool] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if retryable is not None:
            self.retryable = retryable


class LLMConnectionError(LLMClientError):
    """The provider could not be reached (DNS, refused, dropped connection)."""

    retryable = True


class LLMTimeoutError(LLMConnectionError):
    """No complete answer within GROQ_TIMEOUT seconds."""
    pass


class LLMGenerationError(LLMClientError):
    """
    The provider answered, but not with a usable completion.

    HTTP errors other than auth and rate limiting, unknown model, a body
    that is not JSON, or an error event inside a stream. Retryable only
    for 5xx responses.
    """
    pass


class LLMAuthenticationError(LLMClientError):
    """HTTP 401/403: the API key is missing, wrong or revoked."""
    pass


class LLMRateLimitError(LLMClientError):
    """HTTP 429 from the provider."""
    pass
