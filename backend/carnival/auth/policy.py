"""Route auth policy helpers for fail-closed authorization.

Each helper wraps a route endpoint and sets the ``AUTH_POLICY_ATTR`` marker
so that startup validation can verify every route has an explicit auth policy.
"""

from __future__ import annotations

import functools
import inspect
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from starlette.authentication import has_required_scope, requires
from starlette.responses import RedirectResponse
from starlette.routing import Mount, Route

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.routing import BaseRoute

AUTH_POLICY_ATTR = "__auth_policy__"


def _login_redirect(request: Request) -> RedirectResponse:
    """Send the visitor to /login, remembering where they were going."""
    next_path = request.url.path
    if request.url.query:
        next_path = f"{next_path}?{request.url.query}"
    return RedirectResponse(url=f"/login?{urlencode({'next': next_path})}", status_code=303)


def _mark(wrapper: Callable[..., Any], policy: str) -> Callable[..., Any]:
    setattr(wrapper, AUTH_POLICY_ATTR, policy)
    return wrapper


def protected_html(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Require a staff session; redirect anonymous visitors to the login page.

    The redirect is relative. Starlette's ``requires(redirect=...)`` builds an
    absolute URL from the Host header, which the client controls.
    """
    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def async_wrapper(request: Request, **kwargs: str) -> Response:
            if not has_required_scope(request, ["authenticated"]):
                return _login_redirect(request)
            return await endpoint(request, **kwargs)

        return _mark(async_wrapper, "protected_html")

    @functools.wraps(endpoint)
    def sync_wrapper(request: Request, **kwargs: str) -> Response:
        if not has_required_scope(request, ["authenticated"]):
            return _login_redirect(request)
        return endpoint(request, **kwargs)

    return _mark(sync_wrapper, "protected_html")


def protected_api(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Require a staff session; anonymous API calls get 401."""
    return _mark(requires("authenticated", status_code=401)(endpoint), "protected_api")


def public_route(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Mark an endpoint as open to guests.

    The marker goes on a thin wrapper rather than the original function, so
    reusing the bare function on another route does not inherit the policy.
    """
    if inspect.iscoroutinefunction(endpoint):

        @functools.wraps(endpoint)
        async def async_wrapper(request: Request, **kwargs: str) -> Response:
            return await endpoint(request, **kwargs)

        return _mark(async_wrapper, "public")

    @functools.wraps(endpoint)
    def sync_wrapper(request: Request, **kwargs: str) -> Response:
        return endpoint(request, **kwargs)

    return _mark(sync_wrapper, "public")


def collect_protected_api_paths(routes: list[BaseRoute]) -> set[str]:
    return {
        route.path
        for route in routes
        if isinstance(route, Route) and getattr(route.endpoint, AUTH_POLICY_ATTR, None) == "protected_api"
    }


def validate_route_auth_policy(routes: list[BaseRoute]) -> None:
    """Raise RuntimeError naming every Route that lacks a policy marker. Mounts are exempt."""
    unclassified: list[str] = []
    for route in routes:
        if isinstance(route, Mount):
            continue
        if isinstance(route, Route) and not hasattr(route.endpoint, AUTH_POLICY_ATTR):
            unclassified.append(f"{route.path} ({route.name or getattr(route.endpoint, '__name__', 'unknown')})")
    if unclassified:
        raise RuntimeError(f"Unclassified routes missing auth policy: {', '.join(unclassified)}")
