"""
Error raised by the schema gates.

One type covers both gates so callers can treat "wrong shape" uniformly;
``stage`` says which gate tripped.
"""

from typing import Any, Literal, Optional

Stage = Literal["subject_input", "analysis_output", "workspace_input"]


class ValidationError(Exception):
    """A subject or an analysis payload does not match its schema."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        stage: Optional[Stage] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.stage = stage

    def __str__(self) -> str:
        errors = self.validation_errors
        if not errors:
            return self.message
        return f"{self.message}: {'; '.join(errors)}"

    @property
    def validation_errors(self) -> list[str]:
        """``"field: message"`` strings, empty when the whole value was wrong."""
        return self.details.get("validation_errors", [])

    def to_dict(self) -> dict[str, Any]:
        return {"stage": self.stage, **self.details}
