"""
Subject classifier.

One request per call: validate the subject, ask the model for strict JSON,
then run the reply through the analysis schema gate. No retry, no caching.
"""

import json
from typing import Any, Optional

from subject_mailer.assistant.events import DiagnosticObserver, StructlogObserver
from subject_mailer.assistant.exceptions import (
    ClassificationFailedError,
    EmptyResponseError,
    MalformedOutputError,
)
from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.prompt_builder import PromptBuilder
from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.monitoring.metrics import classifications_total
from subject_mailer.validation import (
    SUBJECT_MAX_LENGTH,
    ValidationError,
    validate_analysis,
    validate_subject,
)


class SubjectClassifier:
    """
    Classify an email subject into intent, sentiment, spam flag and confidence.
    
    Outcomes of classify():
    - SubjectAnalysis on success
    - ValidationError: bad subject (before any call) or bad output shape
    - EmptyResponseError: model returned no content
    - MalformedOutputError: content is not JSON
    - ClassificationFailedError: transport/provider failure
    """
    
    def __init__(
        self,
        llm_client: BaseLLMClient,
        prompt_builder: PromptBuilder,
        observer: Optional[DiagnosticObserver] = None,
        subject_max_length: int = SUBJECT_MAX_LENGTH,
    ):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.observer = observer or StructlogObserver()
        self.subject_max_length = subject_max_length
    
    async def classify(self, raw_subject: Any) -> SubjectAnalysis:
        """
        Classify a subject line.
        
        Args:
            raw_subject: Untrusted subject value
            
        Returns:
            Validated SubjectAnalysis
        """
        subject = validate_subject(raw_subject, self.subject_max_length)
        request = self.prompt_builder.build_classification_request(subject)
        
        self.observer.emit("info", "classification_started", subject_length=len(subject))
        
        try:
            response = await self.llm_client.generate(request)
        except Exception as e:
            classifications_total.labels(outcome="provider_error").inc()
            self.observer.emit(
                "error",
                "classification_failed",
                reason="provider_error",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise ClassificationFailedError(
                "Failed to analyze email subject",
                details={"error_type": type(e).__name__},
            ) from e
        
        content = response.content
        if not content or not content.strip():
            classifications_total.labels(outcome="empty_response").inc()
            self.observer.emit("error", "classification_failed", reason="empty_response")
            raise EmptyResponseError("LLM returned empty response")
        
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            classifications_total.labels(outcome="malformed_output").inc()
            self.observer.emit(
                "error",
                "classification_failed",
                reason="malformed_output",
                parse_error=e.msg,
            )
            raise MalformedOutputError(
                f"Failed to parse LLM response as JSON: {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
            ) from e
        
        try:
            analysis = validate_analysis(parsed)
        except ValidationError as e:
            classifications_total.labels(outcome="validation_error").inc()
            self.observer.emit(
                "error",
                "classification_failed",
                reason="validation_error",
                validation_errors=e.validation_errors,
            )
            raise
        
        classifications_total.labels(outcome="success").inc()
        self.observer.emit(
            "info",
            "classification_succeeded",
            intent=analysis.intent.value,
            sentiment=analysis.sentiment.value,
            is_spam=analysis.is_spam,
            confidence=analysis.confidence,
            latency_ms=response.latency_ms,
        )
        return analysis
