"""
HTML page route.

The page is rendered once; all further interaction goes through the
workspace JSON routes.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from subject_mailer.api.dependencies import get_settings
from subject_mailer.config import Settings

router = APIRouter()


@lru_cache()
def get_page_environment(templates_dir: str) -> Environment:
    return Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html"]),
    )


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(settings: Settings = Depends(get_settings)) -> HTMLResponse:
    template = get_page_environment(settings.WEB_TEMPLATES_DIR).get_template("index.html")
    return HTMLResponse(
        template.render(
            app_name=settings.APP_NAME,
            subject_max_length=settings.SUBJECT_MAX_LENGTH,
        )
    )
