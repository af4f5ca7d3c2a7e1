from __future__ import annotations

import contextlib
from http import HTTPStatus
from pathlib import Path
from typing import TYPE_CHECKING, cast

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Mount, Route, WebSocketRoute
from starlette.staticfiles import StaticFiles

from carnival.auth.backend import SessionCookieBackend
from carnival.auth.policy import (
    collect_protected_api_paths,
    protected_api,
    protected_html,
    public_route,
    validate_route_auth_policy,
)
from carnival.guests.service import GuestService
from carnival.realtime.feed import LeaderboardFeed
from carnival.realtime.websocket import leaderboard_websocket
from carnival.roster.manager import RosterManager
from carnival.scoring.service import ScoringService
from carnival.server.middleware import SecurityHeadersMiddleware, SlashNormalizationMiddleware
from carnival.server.settings import CarnivalServerSettings
from carnival.views.admin_handlers import (
    admin_leaderboard_page,
    admin_page,
    assign_game,
    award_points,
    update_points,
)
from carnival.views.api_handlers import api_guests, api_leaderboard, health
from carnival.views.assets import create_templates
from carnival.views.auth_handlers import login, login_page, logout
from carnival.views.guest_handlers import home_page, leaderboard_page, register_guest, welcome_page
from shared.auth import AuthService, AuthSessionStore
from shared.auth.password import get_hasher
from shared.auth.settings import AuthSettings
from shared.db import (
    Database,
    SqliteGameRepository,
    SqliteGuestRepository,
    SqlitePlayRepository,
    SqliteStaffRepository,
)
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.requests import Request


def _make_auth_error_handler(
    protected_api_paths: set[str],
) -> Callable[[Request, Exception], Awaitable[Response]]:
    """Build an HTTPException handler that rewrites 401s on protected JSON endpoints."""

    async def _auth_error_handler(request: Request, exc: Exception) -> Response:
        """Rewrite 401 errors on protected JSON endpoints to JSON responses.

        All other HTTP exceptions delegate to Starlette's default behavior
        (plain-text response with the exception detail).
        """
        http_exc = cast("HTTPException", exc)
        if http_exc.status_code == HTTPStatus.UNAUTHORIZED and request.url.path in protected_api_paths:
            return JSONResponse({"error": "Authentication required"}, status_code=HTTPStatus.UNAUTHORIZED)
        if http_exc.status_code in {HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED}:
            return Response(status_code=http_exc.status_code, headers=http_exc.headers)
        return PlainTextResponse(http_exc.detail or "", status_code=http_exc.status_code, headers=http_exc.headers)

    return _auth_error_handler


def create_app(
    settings: CarnivalServerSettings | None = None,
    auth_settings: AuthSettings | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = CarnivalServerSettings()
    if auth_settings is None:  # pragma: no cover
        auth_settings = AuthSettings()

    static_dir = Path(settings.static_dir).resolve()

    routes = [
        # Guest pages
        Route("/", public_route(home_page), methods=["GET"], name="home_page"),
        Route("/", public_route(register_guest), methods=["POST"], name="register_guest"),
        Route("/welcome", public_route(welcome_page), methods=["GET"], name="welcome_page"),
        Route("/leaderboard", public_route(leaderboard_page), methods=["GET"], name="leaderboard_page"),
        # Staff HTML routes (redirect to login when unauthenticated)
        Route("/admin", protected_html(admin_page), methods=["GET"], name="admin_page"),
        Route("/admin/plays", protected_html(award_points), methods=["POST"], name="award_points"),
        Route("/admin/plays/update", protected_html(update_points), methods=["POST"], name="update_points"),
        Route(
            "/admin/games/{game_id}/assign",
            protected_html(assign_game),
            methods=["POST"],
            name="assign_game",
        ),
        Route(
            "/admin/leaderboard",
            protected_html(admin_leaderboard_page),
            methods=["GET"],
            name="admin_leaderboard_page",
        ),
        # Staff JSON routes (return 401 JSON when unauthenticated)
        Route("/api/guests", protected_api(api_guests), methods=["GET"], name="api_guests"),
        # Public JSON and auth routes
        Route("/api/leaderboard", public_route(api_leaderboard), methods=["GET"], name="api_leaderboard"),
        Route("/health", public_route(health), methods=["GET"], name="health"),
        Route("/login", public_route(login_page), methods=["GET"], name="login_page"),
        Route("/login", public_route(login), methods=["POST"], name="login"),
        Route("/logout", public_route(logout), methods=["POST"], name="logout"),
        WebSocketRoute("/ws/leaderboard", public_route(leaderboard_websocket), name="leaderboard_ws"),
    ]

    if static_dir.is_dir():
        routes.append(Mount("/static", app=StaticFiles(directory=str(static_dir)), name="static"))
    else:
        logger.warning("static directory not found, /static/ will not be served", path=str(static_dir))

    validate_route_auth_policy(routes)
    protected_api_paths = collect_protected_api_paths(routes)

    db = Database(auth_settings.database_path)
    db.connect()
    guest_repo = SqliteGuestRepository(db)
    game_repo = SqliteGameRepository(db)
    play_repo = SqlitePlayRepository(db)
    staff_repo = SqliteStaffRepository(db)

    session_store = AuthSessionStore()
    hasher = get_hasher(auth_settings.password_hasher)
    auth_service = AuthService(staff_repo, session_store, password_hasher=hasher)

    feed = LeaderboardFeed(guest_repo, play_repo)
    roster = RosterManager(settings.roster_path)

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        await roster.seed(game_repo)
        session_store.start_cleanup()
        yield
        await session_store.stop_cleanup()
        await feed.close_all()
        db.close()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={HTTPException: _make_auth_error_handler(protected_api_paths)},
    )
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(AuthenticationMiddleware, backend=SessionCookieBackend(auth_service))  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware)  # type: ignore[arg-type]

    app.state.db = db
    app.state.settings = settings
    app.state.auth_settings = auth_settings
    app.state.templates = create_templates(settings.event_name)
    app.state.roster = roster
    app.state.guest_repo = guest_repo
    app.state.game_repo = game_repo
    app.state.play_repo = play_repo
    app.state.staff_repo = staff_repo
    app.state.auth_service = auth_service
    app.state.leaderboard_feed = feed
    app.state.scoring_service = ScoringService(guest_repo, game_repo, play_repo, feed=feed)
    app.state.guest_service = GuestService(guest_repo, feed=feed)

    logger.info("carnival server ready", games=len(roster.get_games()))
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory carnival.server.app:get_app."""
    s = CarnivalServerSettings()
    auth = AuthSettings()
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s, auth_settings=auth)
