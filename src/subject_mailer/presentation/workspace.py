"""
In-memory workspace behind the single-page UI.

Holds the one "current analysis" slot plus the generated email, and
orchestrates classifier and drafter calls for the page. Actions are
serialized with a lock; reset() bumps a generation counter so a call that
was in flight during a reset never writes its result back.
"""

import asyncio
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field

from subject_mailer.assistant.classifier import SubjectClassifier
from subject_mailer.assistant.drafter import EmailDrafter
from subject_mailer.assistant.exceptions import NoAnalysisError
from subject_mailer.llm.text_utils import confidence_percent
from subject_mailer.models.analysis_models import DraftResult, SubjectAnalysis
from subject_mailer.presentation.extraction import extract_email_body, extract_email_subject
from subject_mailer.validation import ValidationError

logger = structlog.get_logger(__name__)


class WorkspaceView(BaseModel):
    """Read-only snapshot of the workspace for rendering."""
    
    subject: str = Field(default="", description="Last successfully analyzed subject")
    analysis: Optional[SubjectAnalysis] = Field(default=None)
    confidence_percent: Optional[int] = Field(default=None, ge=0, le=100)
    email_content: str = Field(default="", description="Full generated email text")
    email_subject: Optional[str] = Field(default=None)
    email_body: Optional[str] = Field(default=None)
    used_fallback: bool = Field(default=False, description="Email came from the template generator")


class EmailWorkspace:
    """Single-user state for the analyze -> generate -> copy/reset flow."""
    
    def __init__(self, classifier: SubjectClassifier, drafter: EmailDrafter):
        self.classifier = classifier
        self.drafter = drafter
        self._lock = asyncio.Lock()
        self._generation = 0
        self.subject = ""
        self.analysis: Optional[SubjectAnalysis] = None
        self.email_content = ""
        self.used_fallback = False
    
    async def analyze(self, raw_subject: Any) -> SubjectAnalysis:
        """
        Classify a subject and make it the current analysis.
        
        The subject is trimmed before classification. On any error the
        previous analysis and email are left as they were.
        
        Raises:
            ValidationError: subject missing, blank, or too long
            ClassificationError: classifier failures (see SubjectClassifier)
        """
        if not isinstance(raw_subject, str) or not raw_subject.strip():
            raise ValidationError("Please enter a valid subject", stage="workspace_input")
        subject = raw_subject.strip()
        
        async with self._lock:
            generation = self._generation
            analysis = await self.classifier.classify(subject)
            if generation != self._generation:
                logger.info("Discarding analysis finished after reset")
                return analysis
            
            self.subject = subject
            self.analysis = analysis
            self.email_content = ""
            self.used_fallback = False
        
        logger.info("Workspace analysis stored", intent=analysis.intent.value)
        return analysis
    
    async def generate_email(self) -> DraftResult:
        """
        Draft an email from the current analysis.
        
        Raises:
            NoAnalysisError: nothing has been analyzed yet
        """
        async with self._lock:
            if self.analysis is None or not self.subject.strip():
                raise NoAnalysisError("Please analyze a subject first")
            
            generation = self._generation
            result = await self.drafter.draft(self.analysis, self.subject)
            if generation != self._generation:
                logger.info("Discarding email finished after reset")
                return result
            
            self.email_content = result.content
            self.used_fallback = result.used_fallback
        
        logger.info("Workspace email stored", used_fallback=result.used_fallback)
        return result
    
    def clear_email(self) -> None:
        """Drop the generated email, keep the analysis."""
        self.email_content = ""
        self.used_fallback = False
    
    def reset(self) -> None:
        """Return to the initial, empty state."""
        self._generation += 1
        self.subject = ""
        self.analysis = None
        self.email_content = ""
        self.used_fallback = False
        logger.info("Workspace reset")
    
    @property
    def email_subject(self) -> Optional[str]:
        if not self.email_content:
            return None
        return extract_email_subject(self.email_content, self.subject)
    
    @property
    def email_body(self) -> Optional[str]:
        if not self.email_content:
            return None
        return extract_email_body(self.email_content)
    
    def view(self) -> WorkspaceView:
        return WorkspaceView(
            subject=self.subject,
            analysis=self.analysis,
            confidence_percent=(
                confidence_percent(self.analysis.confidence) if self.analysis else None
            ),
            email_content=self.email_content,
            email_subject=self.email_subject,
            email_body=self.email_body,
            used_fallback=self.used_fallback,
        )
