"""
API-specific request and response models for FastAPI endpoints.

These models wrap the core domain models (SubjectAnalysis, DraftResult)
with API-specific metadata and status information.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.models.enums import DraftSource


class AnalyzeRequest(BaseModel):
    """Request to classify a subject line."""
    
    subject: str = Field(
        description="Raw email subject (1-200 characters)",
        examples=["Follow-up on yesterday's meeting"]
    )


class AnalysisResponse(BaseModel):
    """Classification result."""
    
    subject: str = Field(description="Subject that was classified")
    analysis: SubjectAnalysis = Field(description="Validated classification")
    confidence_percent: int = Field(ge=0, le=100, description="Confidence rounded for display")


class GenerateRequest(BaseModel):
    """Request to draft an email from a prior analysis."""
    
    subject: str = Field(description="Original subject line")
    analysis: dict[str, Any] = Field(
        description="Analysis as returned by /analyze; validated again on receipt",
        examples=[{"intent": "support", "sentiment": "neutral", "isSpam": False, "confidence": 0.42}]
    )


class DraftResponse(BaseModel):
    """Drafted email."""
    
    content: str = Field(description="Full email text")
    email_subject: str = Field(description="Subject line extracted from content (or default)")
    email_body: str = Field(description="Content without the subject line")
    source: DraftSource = Field(description="llm or fallback")
    used_fallback: bool = Field(description="True when the template generator produced the text")


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Application version",
        examples=["0.1.0"]
    )
    services: dict[str, str] = Field(
        description="Service-specific health status",
        examples=[{"groq": "ok"}]
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Health check timestamp (UTC)"
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""
    
    app_version: str
    model_name: str
    classify_temperature: float
    draft_temperature: float
    draft_max_tokens: int
    subject_max_length: int


class ErrorResponse(BaseModel):
    """Standard error response format."""
    
    error: str = Field(
        description="Error code or type",
        examples=["validation_failed", "classification_failed", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[dict] = Field(
        default=None,
        description="Additional error details (e.g., validation failures)"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="Error timestamp (UTC)"
    )
