"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
"""

import logging
from datetime import datetime

from fastapi import Request, status
from fastapi.responses import JSONResponse

from subject_mailer.assistant.exceptions import (
    AssistantError,
    ClassificationFailedError,
    EmptyResponseError,
    InvalidSubjectError,
    MalformedOutputError,
    NoAnalysisError,
)
from subject_mailer.llm.exceptions import LLMTimeoutError
from subject_mailer.validation.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details or {},
        "timestamp": datetime.utcnow().isoformat(),
    }


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """
    Handle schema gate failures (bad subject or bad model output).
    
    Maps to 422 Unprocessable Entity.
    """
    logger.warning(
        "Validation error",
        extra={"stage": exc.stage, "details": exc.details},
    )
    
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("validation_failed", exc.message, exc.to_dict()),
    )


async def bad_request_handler(request: Request, exc: AssistantError) -> JSONResponse:
    """
    Handle caller mistakes (blank subject for drafting, no analysis yet).
    
    Maps to 400 Bad Request.
    """
    logger.warning("Invalid request", extra={"error_type": type(exc).__name__})
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("invalid_request", exc.message, exc.details),
    )


async def classification_output_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    """
    Handle empty or non-JSON classifier output.
    
    Maps to 502 Bad Gateway (upstream returned an unusable response).
    """
    logger.error(
        "Classifier output unusable",
        extra={"error_type": type(exc).__name__, "details": exc.details},
    )
    
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body("classification_output_invalid", exc.message, exc.details),
    )


async def classification_failed_handler(
    request: Request, exc: ClassificationFailedError
) -> JSONResponse:
    """
    Handle provider/transport failures during classification.
    
    Maps to 504 Gateway Timeout when the cause was a timeout, else 502.
    """
    timed_out = isinstance(exc.__cause__, LLMTimeoutError)
    logger.error(
        "Classification failed",
        extra={"cause": repr(exc.__cause__), "timed_out": timed_out},
    )
    
    return JSONResponse(
        status_code=(
            status.HTTP_504_GATEWAY_TIMEOUT if timed_out else status.HTTP_502_BAD_GATEWAY
        ),
        content=_error_body(
            "llm_timeout" if timed_out else "classification_failed",
            "Failed to analyze email subject. Please try again.",
            exc.details,
        ),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception(
        "Unexpected error",
        extra={"error_type": type(exc).__name__},
    )
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    ValidationError: validation_error_handler,
    InvalidSubjectError: bad_request_handler,
    NoAnalysisError: bad_request_handler,
    EmptyResponseError: classification_output_error_handler,
    MalformedOutputError: classification_output_error_handler,
    ClassificationFailedError: classification_failed_handler,
    Exception: generic_error_handler,
}
