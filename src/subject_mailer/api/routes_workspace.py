"""
Workspace routes used by the single-page UI.

Every route returns the full workspace view so the page can re-render from
one payload.
"""

import structlog
from fastapi import APIRouter, Depends

from subject_mailer.api.dependencies import get_workspace
from subject_mailer.api.models import AnalyzeRequest
from subject_mailer.presentation.workspace import EmailWorkspace, WorkspaceView

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=WorkspaceView, summary="Current workspace state")
async def read_workspace(
    workspace: EmailWorkspace = Depends(get_workspace),
) -> WorkspaceView:
    return workspace.view()


@router.post("/analyze", response_model=WorkspaceView, summary="Analyze a subject")
async def analyze(
    body: AnalyzeRequest,
    workspace: EmailWorkspace = Depends(get_workspace),
) -> WorkspaceView:
    """Classify the subject and store it as the current analysis."""
    await workspace.analyze(body.subject)
    return workspace.view()


@router.post("/generate", response_model=WorkspaceView, summary="Draft an email")
async def generate(
    workspace: EmailWorkspace = Depends(get_workspace),
) -> WorkspaceView:
    """Draft an email from the current analysis (fallback text on failure)."""
    await workspace.generate_email()
    return workspace.view()


@router.delete("/email", response_model=WorkspaceView, summary="Clear the generated email")
async def clear_email(
    workspace: EmailWorkspace = Depends(get_workspace),
) -> WorkspaceView:
    workspace.clear_email()
    return workspace.view()


@router.post("/reset", response_model=WorkspaceView, summary="Clear everything")
async def reset(
    workspace: EmailWorkspace = Depends(get_workspace),
) -> WorkspaceView:
    workspace.reset()
    return workspace.view()
