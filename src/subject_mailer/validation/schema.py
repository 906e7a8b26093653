"""
Schema gates for subject input and classifier output.

Both gates are mandatory: user input is checked before any remote call, and
model output is checked before any field is trusted. Pydantic does the
checking; its errors are converted to our ValidationError.
"""

from collections.abc import Mapping
from functools import lru_cache
from typing import Annotated, Any

import structlog
from pydantic import StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.monitoring.metrics import validation_failures_total
from .exceptions import ValidationError

logger = structlog.get_logger(__name__)

SUBJECT_MAX_LENGTH = 200


@lru_cache()
def _subject_adapter(max_length: int) -> TypeAdapter:
    return TypeAdapter(
        Annotated[str, StringConstraints(strict=True, min_length=1, max_length=max_length)]
    )


def _format_errors(exc: PydanticValidationError) -> list[str]:
    messages = []
    for err in exc.errors():
        path = ".".join(str(loc) for loc in err["loc"]) or "root"
        messages.append(f"{path}: {err['msg']}")
    return messages


def validate_subject(raw: Any, max_length: int = SUBJECT_MAX_LENGTH) -> str:
    """
    Validate a raw subject line.
    
    Length is measured on the raw, untrimmed string.
    
    Args:
        raw: Candidate subject (anything)
        max_length: Maximum number of characters
        
    Returns:
        The subject unchanged
        
    Raises:
        ValidationError: Not a string, empty, or longer than max_length
    """
    if not isinstance(raw, str):
        validation_failures_total.labels(stage="subject_input", error_type="not_a_string").inc()
        raise ValidationError(
            "Subject must be a string",
            details={"validation_errors": [f"root: expected str, got {type(raw).__name__}"]},
            stage="subject_input",
        )
    
    try:
        return _subject_adapter(max_length).validate_python(raw)
    except PydanticValidationError as e:
        validation_failures_total.labels(stage="subject_input", error_type="schema_violation").inc()
        if not raw:
            message = "Subject cannot be empty"
        else:
            message = f"Subject must be <= {max_length} characters"
        raise ValidationError(
            message,
            details={"validation_errors": _format_errors(e), "length": len(raw)},
            stage="subject_input",
        ) from e


def validate_analysis(raw: Any) -> SubjectAnalysis:
    """
    Validate untrusted classifier output.
    
    Args:
        raw: Parsed JSON (anything)
        
    Returns:
        SubjectAnalysis
        
    Raises:
        ValidationError: Not an object, missing field, value outside its
            enumeration, non-boolean isSpam, or confidence outside [0, 1]
    """
    if not isinstance(raw, Mapping):
        validation_failures_total.labels(stage="analysis_output", error_type="not_an_object").inc()
        raise ValidationError(
            f"Analysis must be a JSON object (got {type(raw).__name__})",
            details={"validation_errors": [f"root: expected object, got {type(raw).__name__}"]},
            stage="analysis_output",
        )
    
    try:
        analysis = SubjectAnalysis.model_validate(dict(raw))
    except PydanticValidationError as e:
        validation_failures_total.labels(stage="analysis_output", error_type="schema_violation").inc()
        error_messages = _format_errors(e)
        logger.warning("Analysis failed schema validation", validation_errors=error_messages)
        raise ValidationError(
            f"Analysis validation failed with {e.error_count()} error(s)",
            details={"validation_errors": error_messages},
            stage="analysis_output",
        ) from e
    
    logger.debug("Analysis validated", intent=analysis.intent.value, sentiment=analysis.sentiment.value)
    return analysis
