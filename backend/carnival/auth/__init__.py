"""Carnival staff authentication: Starlette backend, user model, and route policy."""

from carnival.auth.backend import SessionCookieBackend
from carnival.auth.models import AuthenticatedStaff
from carnival.auth.policy import protected_api, protected_html, public_route, validate_route_auth_policy

__all__ = [
    "AuthenticatedStaff",
    "SessionCookieBackend",
    "protected_api",
    "protected_html",
    "public_route",
    "validate_route_auth_policy",
]
