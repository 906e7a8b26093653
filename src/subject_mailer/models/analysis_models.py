"""
Domain models for subject classification and email drafting.

SubjectAnalysis is the only trusted shape of classifier output. Instances are
built by validating untrusted JSON (see subject_mailer.validation.schema);
field constraints here are what that validation enforces.
"""

from pydantic import BaseModel, ConfigDict, Field

from subject_mailer.models.enums import DraftSource, IntentEnum, SentimentEnum


class SubjectAnalysis(BaseModel):
    """
    Classification of a single email subject.
    
    The wire format uses camelCase ``isSpam``; unknown extra keys sent by the
    model are dropped rather than rejected.
    """
    
    model_config = ConfigDict(frozen=True, extra="ignore")
    
    intent: IntentEnum = Field(..., description="Why the subject was written")
    sentiment: SentimentEnum = Field(..., description="Emotional tone")
    is_spam: bool = Field(..., alias="isSpam", strict=True, description="Spam indicator")
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        strict=True,
        description="Model-reported certainty in [0, 1]",
    )


class DraftResult(BaseModel):
    """Drafted email text plus the path that produced it."""
    
    model_config = ConfigDict(frozen=True)
    
    content: str = Field(..., description="Full email text, normally starting with 'Subject:'")
    source: DraftSource = Field(..., description="llm or fallback")
    
    @property
    def used_fallback(self) -> bool:
        return self.source is DraftSource.FALLBACK
