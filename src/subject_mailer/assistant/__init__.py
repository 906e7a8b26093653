"""
Subject classification and email drafting.

- classifier.py: SubjectClassifier (strict-JSON classification + schema gate)
- drafter.py: EmailDrafter (single-shot and streamed drafting with fallback)
- fallback.py: generate_fallback_email (deterministic template email)
- events.py: DiagnosticObserver protocol and structlog-backed default
- exceptions.py: Classification and drafting errors
"""

from .classifier import SubjectClassifier
from .drafter import EmailDrafter
from .events import DiagnosticObserver, StructlogObserver
from .exceptions import (
    AssistantError,
    ClassificationError,
    ClassificationFailedError,
    EmptyResponseError,
    InvalidSubjectError,
    MalformedOutputError,
    NoAnalysisError,
)
from .fallback import generate_fallback_email

__all__ = [
    "SubjectClassifier",
    "EmailDrafter",
    "generate_fallback_email",
    "DiagnosticObserver",
    "StructlogObserver",
    "AssistantError",
    "ClassificationError",
    "EmptyResponseError",
    "MalformedOutputError",
    "ClassificationFailedError",
    "InvalidSubjectError",
    "NoAnalysisError",
]
