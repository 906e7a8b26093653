"""
FastAPI API routes and endpoints.

- routes_api.py: Stateless endpoints (POST /analyze, /generate, /generate/stream, GET /health, /schema, /version)
- routes_workspace.py: Page-backed workflow (/workspace/...)
- routes_web.py: The HTML page (GET /)
- dependencies.py: Dependency injection for LLM client, classifier, drafter, workspace
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
"""

from subject_mailer.api import dependencies, error_handlers, models
from subject_mailer.api.routes_api import router as api_router
from subject_mailer.api.routes_web import router as web_router
from subject_mailer.api.routes_workspace import router as workspace_router

__all__ = [
    "api_router",
    "workspace_router",
    "web_router",
    "dependencies",
    "error_handlers",
    "models",
]
