"""
Pydantic data models for Subject Mailer.

Includes:
- Enums (IntentEnum, SentimentEnum, DraftSource)
- Domain models (SubjectAnalysis, DraftResult)
- LLM models (ChatMessage, LLMGenerationRequest, LLMGenerationResponse)
"""

from subject_mailer.models.enums import DraftSource, IntentEnum, SentimentEnum
from subject_mailer.models.analysis_models import DraftResult, SubjectAnalysis
from subject_mailer.models.llm_models import (
    ChatMessage,
    LLMGenerationRequest,
    LLMGenerationResponse,
)

__all__ = [
    # Enums
    "IntentEnum",
    "SentimentEnum",
    "DraftSource",
    # Domain models
    "SubjectAnalysis",
    "DraftResult",
    # LLM models
    "ChatMessage",
    "LLMGenerationRequest",
    "LLMGenerationResponse",
]
