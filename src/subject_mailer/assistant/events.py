"""
Diagnostic events emitted by the classifier and drafter.

Components take an observer instead of logging directly so callers (and
tests) can capture leveled, structured events without touching log config.
"""

from typing import Any, Literal, Protocol

import structlog

EventLevel = Literal["debug", "info", "warning", "error"]


class DiagnosticObserver(Protocol):
    """Receives structured diagnostic events."""
    
    def emit(self, level: EventLevel, event: str, **fields: Any) -> None:
        ...


class StructlogObserver:
    """Default observer: forwards every event to a structlog logger."""
    
    def __init__(self, logger: Any = None):
        self._logger = logger or structlog.get_logger("subject_mailer.assistant")
    
    def emit(self, level: EventLevel, event: str, **fields: Any) -> None:
        getattr(self._logger, level)(event, **fields)
