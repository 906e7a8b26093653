"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for LLM clients
- GroqClient: Implementation for Groq chat completions (httpx)
- PromptBuilder: Renders classification and drafting requests
- text_utils: Text helpers (confidence percentage)
- exceptions: LLM-specific exceptions
"""

from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.groq_client import GroqClient
from subject_mailer.llm.prompt_builder import PromptBuilder
from subject_mailer.llm.exceptions import (
    LLMAuthenticationError,
    LLMClientError,
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    LLMTimeoutError,
)

__all__ = [
    "BaseLLMClient",
    "GroqClient",
    "PromptBuilder",
    "LLMClientError",
    "LLMConnectionError",
    "LLMTimeoutError",
    "LLMGenerationError",
    "LLMAuthenticationError",
    "LLMRateLimitError",
]
