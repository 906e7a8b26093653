"""
Provider-neutral interface for chat completion clients.

The classifier and drafter only see this interface; GroqClient is the one
production implementation, and tests substitute an in-memory fake.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

import structlog

from subject_mailer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse

logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Chat completion client.

    Implementations own transport concerns: HTTP, auth, timeouts, attempt
    loop, and mapping failures onto LLMClientError subclasses. They do not
    build prompts, judge content, or produce fallback text.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 1,
        **kwargs
    ):
        """
        Args:
            base_url: API root, trailing slash optional
            timeout: Seconds before a request is abandoned
            max_retries: Total attempts for generate(); 1 means a single try
            **kwargs: Provider-specific options, kept on ``extra_config``
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.extra_config = kwargs

        logger.info(
            "LLM client ready",
            client_class=type(self).__name__,
            base_url=self.base_url,
            timeout=timeout,
            attempts=self.max_retries,
        )

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Run one completion and return the first choice's text.

        ``content`` is "" when the provider sent no text; emptiness is not an
        error at this layer.

        Raises:
            LLMClientError: any subclass, see llm.exceptions
        """

    @abstractmethod
    def stream(self, request: LLMGenerationRequest) -> AsyncIterator[str]:
        """
        Yield completion text increments in the order the provider sends them.

        Implemented as an async generator; empty deltas are skipped. Never
        retried. Raises LLMClientError subclasses, possibly after some
        increments were already yielded.
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the provider answers and accepts the key. Never raises."""

    async def close(self):
        """Release pooled connections. No-op unless overridden."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, timeout={self.timeout}s)"
