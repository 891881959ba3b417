"""
Template Rendering

Jinja2 environment shared by every router, plus the two responses a form
controller ends with: a rendered page or a 303 redirect.
"""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from catalog.config import get_settings
from catalog.utils import display

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["app_name"] = get_settings().app_name
templates.env.globals["list_url"] = display.list_url


def render(
    request: Request,
    template: str,
    status_code: int = status.HTTP_200_OK,
    **context: Any,
) -> HTMLResponse:
    """Render template with context."""
    return templates.TemplateResponse(
        request,
        template,
        context,
        status_code=status_code,
    )


def redirect(url: str) -> RedirectResponse:
    """See Other redirect, so the browser follows up with a GET."""
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
