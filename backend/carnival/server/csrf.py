"""Double-submit CSRF tokens for every form the carnival posts.

Guest registration runs on kiosk tablets left open for hours; a rejected
form asks the guest to reload the page.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from starlette.responses import PlainTextResponse

if TYPE_CHECKING:
    from starlette.datastructures import FormData
    from starlette.requests import Request
    from starlette.responses import Response

CSRF_COOKIE_NAME = "csrf_token"
CSRF_FORM_FIELD = "csrf_token"
CSRF_COOKIE_MAX_AGE = 24 * 60 * 60  # one event day, same as a staff session
CSRF_REJECTED_MESSAGE = "This form has expired. Please reload the page and try again."


def get_or_create_csrf_token(request: Request) -> tuple[str, bool]:
    """Return (token, is_new); a new token still has to be set as a cookie."""
    token = request.cookies.get(CSRF_COOKIE_NAME)
    if token:
        return token, False
    return secrets.token_urlsafe(32), True


def set_csrf_cookie(response: Response, token: str, *, cookie_secure: bool) -> None:
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        max_age=CSRF_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=cookie_secure,
        path="/",
    )


def csrf_token_matches(request: Request, form_data: FormData) -> bool:
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME)
    form_token = form_data.get(CSRF_FORM_FIELD)
    if not cookie_token or not isinstance(form_token, str) or not form_token:
        return False
    return secrets.compare_digest(cookie_token, form_token)


async def read_checked_form(request: Request) -> tuple[FormData, Response | None]:
    """Parse a posted form. The second item is a 403 to return when the token is missing or stale."""
    form = await request.form()
    if csrf_token_matches(request, form):
        return form, None
    return form, PlainTextResponse(CSRF_REJECTED_MESSAGE, status_code=403)
