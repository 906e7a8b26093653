"""
Email drafter.

Asks the model for a complete reply email built from a SubjectAnalysis.
Any failure, or an empty reply, is recovered with the deterministic fallback
generator; callers always get text back.
"""

from contextlib import aclosing
from typing import AsyncIterator, Optional

from subject_mailer.assistant.events import DiagnosticObserver, StructlogObserver
from subject_mailer.assistant.exceptions import InvalidSubjectError
from subject_mailer.assistant.fallback import generate_fallback_email
from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.prompt_builder import PromptBuilder
from subject_mailer.models.analysis_models import DraftResult, SubjectAnalysis
from subject_mailer.models.enums import DraftSource
from subject_mailer.monitoring.metrics import drafts_total


class EmailDrafter:
    """
    Draft reply emails from a classification.
    
    draft()    -> DraftResult (text + whether the fallback was used)
    generate() -> str
    stream()   -> async iterator of text increments
    """
    
    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        observer: Optional[DiagnosticObserver] = None,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.observer = observer or StructlogObserver()
    
    @staticmethod
    def check_subject(subject: str) -> None:
        """Raise InvalidSubjectError if the subject is blank after trimming."""
        if not subject.strip():
            raise InvalidSubjectError("Subject cannot be empty")
    
    def _fallback(self, analysis: SubjectAnalysis, subject: str, mode: str) -> str:
        drafts_total.labels(source=DraftSource.FALLBACK.value, mode=mode).inc()
        self.observer.emit("info", "draft_fallback_used", mode=mode)
        return generate_fallback_email(analysis, subject)
    
    async def draft(self, analysis: SubjectAnalysis, subject: str) -> DraftResult:
        """
        Draft an email in a single request.
        
        Raises:
            InvalidSubjectError: subject is blank (checked before any call)
        """
        self.check_subject(subject)
        request = self.prompt_builder.build_draft_request(analysis, subject)
        
        try:
            response = await self.llm_client.generate(request)
        except Exception as e:
            self.observer.emit(
                "error",
                "draft_generation_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            return DraftResult(
                content=self._fallback(analysis, subject, mode="single"),
                source=DraftSource.FALLBACK,
            )
        
        content = response.content.strip()
        if not content:
            self.observer.emit("warning", "draft_empty_response")
            return DraftResult(
                content=self._fallback(analysis, subject, mode="single"),
                source=DraftSource.FALLBACK,
            )
        
        drafts_total.labels(source=DraftSource.LLM.value, mode="single").inc()
        self.observer.emit(
            "debug",
            "draft_generated",
            content_length=len(content),
            latency_ms=response.latency_ms,
        )
        return DraftResult(content=content, source=DraftSource.LLM)
    
    async def generate(self, analysis: SubjectAnalysis, subject: str) -> str:
        """Draft an email and return only its text."""
        result = await self.draft(analysis, subject)
        return result.content
    
    async def stream(self, analysis: SubjectAnalysis, subject: str) -> AsyncIterator[str]:
        """
        Draft an email, yielding text as the model produces it.
        
        Increments arrive in model order; concatenating them gives the full
        text. If the call fails, or produces no text at all, the fallback
        email is yielded as the final increment instead of raising.
        Cancellation and early close propagate untouched.
        
        Raises:
            InvalidSubjectError: subject is blank (on first iteration)
        """
        self.check_subject(subject)
        request = self.prompt_builder.build_draft_request(analysis, subject, stream=True)
        
        chunks_yielded = 0
        try:
            async with aclosing(self.llm_client.stream(request)) as chunks:
                async for chunk in chunks:
                    if not chunk:
                        continue
                    chunks_yielded += 1
                    yield chunk
        except Exception as e:
            self.observer.emit(
                "error",
                "draft_stream_failed",
                error_type=type(e).__name__,
                error=str(e),
                chunks_before_failure=chunks_yielded,
            )
            yield self._fallback(analysis, subject, mode="stream")
            return
        
        if chunks_yielded == 0:
            self.observer.emit("warning", "draft_empty_response", mode="stream")
            yield self._fallback(analysis, subject, mode="stream")
            return
        
        drafts_total.labels(source=DraftSource.LLM.value, mode="stream").inc()
        self.observer.emit("debug", "draft_stream_completed", chunks=chunks_yielded)
