"""
Stateless API routes: classify a subject, draft an email, service info.

Each call stands alone; the page-backed workflow lives in routes_workspace.py.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, StreamingResponse

from subject_mailer.api.dependencies import (
    get_classifier,
    get_drafter,
    get_llm_client,
    get_settings,
)
from subject_mailer.api.models import (
    AnalysisResponse,
    AnalyzeRequest,
    DraftResponse,
    GenerateRequest,
    HealthResponse,
    VersionResponse,
)
from subject_mailer.assistant.classifier import SubjectClassifier
from subject_mailer.assistant.drafter import EmailDrafter
from subject_mailer.config import Settings
from subject_mailer.llm.base_client import BaseLLMClient
from subject_mailer.llm.text_utils import confidence_percent
from subject_mailer.models.analysis_models import SubjectAnalysis
from subject_mailer.presentation.extraction import extract_email_body, extract_email_subject
from subject_mailer.validation import validate_analysis

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    summary="Classify an email subject",
    responses={
        422: {"description": "Invalid subject or invalid model output"},
        502: {"description": "Provider failure or unusable model output"},
        504: {"description": "Provider timed out"},
    },
)
async def analyze_subject(
    body: AnalyzeRequest,
    classifier: SubjectClassifier = Depends(get_classifier),
) -> AnalysisResponse:
    """
    Classify intent, sentiment and spam likelihood of a subject line.
    
    Single attempt; errors are returned, never retried.
    """
    analysis = await classifier.classify(body.subject)
    return AnalysisResponse(
        subject=body.subject,
        analysis=analysis,
        confidence_percent=confidence_percent(analysis.confidence),
    )


@router.post(
    "/generate",
    response_model=DraftResponse,
    summary="Draft an email from an analysis",
    responses={
        400: {"description": "Blank subject"},
        422: {"description": "Analysis does not match the schema"},
    },
)
async def generate_email(
    body: GenerateRequest,
    drafter: EmailDrafter = Depends(get_drafter),
) -> DraftResponse:
    """
    Draft a reply email. Provider failures fall back to a template email.
    """
    analysis = validate_analysis(body.analysis)
    result = await drafter.draft(analysis, body.subject)
    
    return DraftResponse(
        content=result.content,
        email_subject=extract_email_subject(result.content, body.subject),
        email_body=extract_email_body(result.content),
        source=result.source,
        used_fallback=result.used_fallback,
    )


@router.post(
    "/generate/stream",
    summary="Draft an email, streaming text as it is produced",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}},
        400: {"description": "Blank subject"},
        422: {"description": "Analysis does not match the schema"},
    },
)
async def generate_email_stream(
    body: GenerateRequest,
    drafter: EmailDrafter = Depends(get_drafter),
) -> StreamingResponse:
    """
    Stream a drafted email as plain text increments.
    
    On failure the fallback email is sent as the last increment. A client
    disconnect closes the upstream stream.
    """
    analysis = validate_analysis(body.analysis)
    drafter.check_subject(body.subject)
    
    return StreamingResponse(
        drafter.stream(analysis, body.subject),
        media_type="text/plain; charset=utf-8",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Provider reachable"},
        503: {"description": "Provider unreachable"},
    },
)
async def health_check(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings),
):
    """Check reachability of the LLM provider."""
    groq_ok = await llm_client.health_check()
    services = {"groq": "ok" if groq_ok else "unreachable"}
    
    health_status = "healthy" if groq_ok else "unhealthy"
    status_code = status.HTTP_200_OK if groq_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    
    logger.info(
        "Health check",
        extra={"status": health_status, "services": services},
    )
    
    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
        timestamp=datetime.utcnow(),
    )
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/schema",
    summary="JSON Schema of a subject analysis",
)
async def get_schema():
    """Return the JSON Schema the classifier output must satisfy."""
    return SubjectAnalysis.model_json_schema(by_alias=True)


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Model and generation settings",
)
async def get_version(
    settings: Settings = Depends(get_settings),
) -> VersionResponse:
    return VersionResponse(
        app_version=settings.APP_VERSION,
        model_name=settings.GROQ_MODEL,
        classify_temperature=settings.CLASSIFY_TEMPERATURE,
        draft_temperature=settings.DRAFT_TEMPERATURE,
        draft_max_tokens=settings.DRAFT_MAX_TOKENS,
        subject_max_length=settings.SUBJECT_MAX_LENGTH,
    )
