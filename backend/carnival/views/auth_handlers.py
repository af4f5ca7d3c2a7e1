"""Staff login and logout."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.responses import RedirectResponse, Response

from carnival.auth.backend import SESSION_COOKIE_NAME
from carnival.server.csrf import read_checked_form
from carnival.views.assets import render_page
from shared.auth.service import AuthError
from shared.auth.session_store import DEFAULT_SESSION_TTL_SECONDS

if TYPE_CHECKING:
    from starlette.requests import Request

    from shared.auth.service import AuthService
    from shared.auth.settings import AuthSettings

DEFAULT_NEXT_PATH = "/admin"


def safe_next_path(value: object) -> str:
    """Accept only same-site relative paths as the post-login destination."""
    if not isinstance(value, str) or not value.startswith("/") or value.startswith("//") or "\\" in value:
        return DEFAULT_NEXT_PATH
    return value


async def login_page(request: Request) -> Response:
    """GET /login - render the staff login form."""
    next_path = safe_next_path(request.query_params.get("next"))
    if request.user.is_authenticated:
        return RedirectResponse(next_path, status_code=303)
    return render_page(request, "login.html", {"next": next_path, "email": ""})


async def login(request: Request) -> Response:
    """POST /login - check credentials, set the session cookie, go to ``next``."""
    form, rejected = await read_checked_form(request)
    if rejected:
        return rejected

    auth_service: AuthService = request.app.state.auth_service
    auth_settings: AuthSettings = request.app.state.auth_settings
    email = str(form.get("email", ""))
    password = str(form.get("password", ""))
    next_path = safe_next_path(form.get("next"))

    try:
        session = await auth_service.login(email, password)
    except AuthError as e:
        return render_page(request, "login.html", {"error": str(e), "next": next_path, "email": email})

    response = RedirectResponse(next_path, status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session.session_id,
        httponly=True,
        samesite="lax",
        secure=auth_settings.cookie_secure,
        max_age=DEFAULT_SESSION_TTL_SECONDS,
        path="/",
    )
    return response


async def logout(request: Request) -> Response:
    """POST /logout - end the session and go back to the guest home page."""
    form, rejected = await read_checked_form(request)
    if rejected:
        return rejected

    auth_service: AuthService = request.app.state.auth_service
    session_id = request.cookies.get(SESSION_COOKIE_NAME)
    if session_id:
        auth_service.logout(session_id)
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(key=SESSION_COOKIE_NAME, path="/")
    return response
