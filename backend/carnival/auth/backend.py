"""Starlette AuthenticationBackend that validates staff session cookies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.authentication import AuthCredentials, AuthenticationBackend

from carnival.auth.models import AuthenticatedStaff

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from shared.auth.service import AuthService

SESSION_COOKIE_NAME = "session_id"


class SessionCookieBackend(AuthenticationBackend):
    """Authenticate staff by the ``session_id`` cookie.

    Guests never sign in, so requests without a valid session fall through
    as anonymous and only public routes will serve them.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self._auth_service = auth_service

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, AuthenticatedStaff] | None:
        session = self._auth_service.validate_session(conn.cookies.get(SESSION_COOKIE_NAME))
        if session is None:
            return None
        return AuthCredentials(["authenticated"]), AuthenticatedStaff(
            user_id=session.user_id,
            email=session.email,
            role=session.role,
        )
