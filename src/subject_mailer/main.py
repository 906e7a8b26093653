"""
FastAPI application entry point for Subject Mailer.
"""

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

from subject_mailer.api.dependencies import get_llm_client, get_prompt_builder
from subject_mailer.api.error_handlers import EXCEPTION_HANDLERS
from subject_mailer.api.middleware import RequestTracingMiddleware
from subject_mailer.api.routes_api import router as api_router
from subject_mailer.api.routes_web import router as web_router
from subject_mailer.api.routes_workspace import router as workspace_router
from subject_mailer.config import settings
from subject_mailer.logging_config import configure_logging

# Logging first, so import-time events from the routers are formatted too
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, app_name="subject-mailer")
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Email subject classification and reply drafting with LLM + template fallback",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(web_router, tags=["web"])
app.include_router(api_router, tags=["api"])
app.include_router(workspace_router, prefix="/workspace", tags=["workspace"])


@app.on_event("startup")
async def startup():
    """Application startup - load templates eagerly so bad config fails here."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        groq_base_url=settings.GROQ_BASE_URL,
        model=settings.GROQ_MODEL,
    )
    get_prompt_builder()
    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close the pooled HTTP client."""
    logger.info("Application shutdown")
    await get_llm_client().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "subject_mailer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
