from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .config import settings
from ..components.header import build_header

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render a full page: header for the session's role plus pending notifications."""
    session = request.state.session

    page = {
        "role": session.role.value if session.role else None,
        "header": build_header(request.url.path, session.role, session.token),
        "notifications": session.pop_notifications(),
        "settings": settings,
        "debounce_ms": settings.SEARCH_DEBOUNCE_MS,
    }
    page.update(context or {})

    return templates.TemplateResponse(request, name, page, status_code=status_code)


def render_fragment(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
):
    """Render a partial used by live search; notifications stay queued."""
    session = request.state.session

    fragment = {"role": session.role.value if session.role else None}
    fragment.update(context or {})

    return templates.TemplateResponse(request, name, fragment)
