"""
Presentation layer: workspace state and email text helpers for the web page.
"""

from .extraction import extract_email_body, extract_email_subject
from .workspace import EmailWorkspace, WorkspaceView

__all__ = [
    "EmailWorkspace",
    "WorkspaceView",
    "extract_email_subject",
    "extract_email_body",
]
