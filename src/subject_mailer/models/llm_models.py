"""
LLM-specific data models for request/response cycle.

These models are internal to the LLM layer and describe the raw exchange with
the chat completions API. They are kept apart from the domain models
(SubjectAnalysis) so the provider can change without touching validation.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single chat message (system or user turn)."""
    model_config = ConfigDict(frozen=True)
    
    role: Literal["system", "user", "assistant"]
    content: str


class LLMGenerationRequest(BaseModel):
    """
    Internal request model for LLM generation.
    
    Standardized format handed to any LLM client implementation.
    """
    model_config = ConfigDict(frozen=True)
    
    messages: list[ChatMessage] = Field(..., min_length=1, description="System + user messages")
    model: str = Field(..., description="Model identifier (e.g., 'openai/gpt-oss-120b')")
    temperature: float = Field(default=0.1, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: Optional[int] = Field(
        default=None, ge=1, description="Maximum completion tokens (provider default if None)"
    )
    response_format: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Provider response format, e.g. {'type': 'json_object'}"
    )
    stream: bool = Field(default=False, description="Whether the response is streamed")


class LLMGenerationResponse(BaseModel):
    """
    Internal response model from LLM generation.
    
    ``content`` is the first choice's message text, "" when the provider
    returned none. Emptiness is judged by the caller.
    """
    model_config = ConfigDict(frozen=True)
    
    content: str = Field(..., description="Generated text (may be empty)")
    model_version: str = Field(..., description="Model that served the request")
    finish_reason: Optional[str] = Field(default=None, description="stop, length, ...")
    prompt_tokens: Optional[int] = Field(default=None)
    completion_tokens: Optional[int] = Field(default=None)
    latency_ms: int = Field(..., ge=0, description="Generation latency in milliseconds")
    raw_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific metadata (for debugging)"
    )
