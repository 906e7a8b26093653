"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration
tests, including a scripted LLM client so nothing talks to Groq.
"""

import os

# Settings are built at import time and require an API key
os.environ.setdefault("GROQ_API_KEY", "test-key")

from typing import Any, AsyncIterator, Optional, Sequence

import pytest

from subject_mailer.config import PACKAGE_DIR, Settings
from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.prompt_builder import PromptBuilder
from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.models.enums import IntentEnum, SentimentEnum
from subject_mailer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from subject_mailer.validation import validate_analysis


class FakeLLMClient(BaseLLMClient):
    """
    Scripted LLM client.

    generate() returns `content` or raises `error`; stream() yields `chunks`
    and then raises `stream_error` if set. Every request is recorded.
    """

    def __init__(
        self,
        content: str = "",
        error: Optional[Exception] = None,
        chunks: Sequence[str] = (),
        stream_error: Optional[Exception] = None,
    ):
        super().__init__(base_url="https://groq.test/openai/v1")
        self.content = content
        self.error = error
        self.chunks = list(chunks)
        self.stream_error = stream_error
        self.requests: list[LLMGenerationRequest] = []
        self.healthy = True
        self.closed = False

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return LLMGenerationResponse(
            content=self.content,
            model_version=request.model,
            finish_reason="stop",
            latency_ms=12,
        )

    async def stream(self, request: LLMGenerationRequest) -> AsyncIterator[str]:
        self.requests.append(request)
        for chunk in self.chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error

    async def health_check(self) -> bool:
        return self.healthy

    async def close(self):
        self.closed = True


class RecordingObserver:
    """Collects (level, event, fields) tuples."""

    def __init__(self):
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def emit(self, level: str, event: str, **fields: Any) -> None:
        self.events.append((level, event, fields))

    def names(self) -> list[str]:
        return [event for _, event, _ in self.events]


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed.
    """
    return Settings(
        # === Application ===
        APP_NAME="Subject Mailer (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Groq ===
        GROQ_API_KEY="test-key",
        GROQ_BASE_URL="https://groq.test/openai/v1",
        GROQ_MODEL="openai/gpt-oss-120b",
        GROQ_TIMEOUT=5.0,

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def llm_factory():
    """FakeLLMClient class, for tests that script their own responses."""
    return FakeLLMClient


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def prompts_dir():
    """Path to the packaged prompt templates."""
    return PACKAGE_DIR / "prompts"


@pytest.fixture
def prompt_builder(prompts_dir) -> PromptBuilder:
    return PromptBuilder(templates_dir=prompts_dir)


@pytest.fixture
def support_analysis() -> SubjectAnalysis:
    """Neutral support request, not spam."""
    return validate_analysis(
        {"intent": "support", "sentiment": "neutral", "isSpam": False, "confidence": 0.42}
    )


@pytest.fixture
def spam_analysis() -> SubjectAnalysis:
    """Obvious spam with positive wording."""
    return validate_analysis(
        {"intent": "spam", "sentiment": "positive", "isSpam": True, "confidence": 0.97}
    )


@pytest.fixture
def make_analysis():
    """Factory for analyses with overridable fields."""
    def _make(
        intent: IntentEnum = IntentEnum.PERSONAL,
        sentiment: SentimentEnum = SentimentEnum.NEUTRAL,
        is_spam: bool = False,
        confidence: float = 0.6,
    ) -> SubjectAnalysis:
        return validate_analysis(
            {
                "intent": intent.value,
                "sentiment": sentiment.value,
                "isSpam": is_spam,
                "confidence": confidence,
            }
        )
    return _make
