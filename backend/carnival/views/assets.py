"""Jinja2 template factory and the page render helper shared by all views."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from starlette.templating import Jinja2Templates

from carnival.roster.types import DEFAULT_GAME_ICON, GAME_ICONS
from carnival.server.csrf import get_or_create_csrf_token, set_csrf_cookie

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def game_icon(game_name: str) -> str:
    return GAME_ICONS.get(game_name, DEFAULT_GAME_ICON)


def email_handle(email: str | None) -> str:
    """Local part of an email, shown next to game buttons."""
    return email.split("@", 1)[0] if email else ""


def create_templates(event_name: str = "HANIVAL") -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["game_icon"] = game_icon
    templates.env.filters["email_handle"] = email_handle
    templates.env.globals["event_name"] = event_name
    return templates


def render_page(
    request: Request,
    template_name: str,
    context: dict | None = None,
    status_code: int = 200,
) -> Response:
    """Render a template with the CSRF token and signed-in staff, setting the CSRF cookie if new."""
    templates: Jinja2Templates = request.app.state.templates
    csrf_token, is_new = get_or_create_csrf_token(request)
    user = request.user if request.user.is_authenticated else None
    response = templates.TemplateResponse(
        request,
        template_name,
        {"csrf_token": csrf_token, "staff": user, "error": None, **(context or {})},
        status_code=status_code,
    )
    if is_new:
        set_csrf_cookie(response, csrf_token, cookie_secure=request.app.state.auth_settings.cookie_secure)
    return response
