"""Guest-facing pages: registration, welcome, and the live leaderboard."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.responses import RedirectResponse

from carnival.guests.service import RegistrationError
from carnival.scoring.leaderboard import TOTAL_GAMES, standings
from carnival.server.csrf import read_checked_form
from carnival.views.assets import render_page
from shared.dal.errors import StoreError

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from carnival.guests.service import GuestService
    from shared.dal.game_repository import GameRepository
    from shared.dal.guest_repository import GuestRepository
    from shared.dal.play_repository import PlayRepository

logger = structlog.get_logger()


async def home_page(request: Request) -> Response:
    """GET / - render the registration form."""
    return render_page(request, "home.html", {"form": {}})


async def register_guest(request: Request) -> Response:
    """POST / - register a guest and send them to the welcome page."""
    form, rejected = await read_checked_form(request)
    if rejected:
        return rejected

    guest_service: GuestService = request.app.state.guest_service
    values = {key: str(form.get(key, "")) for key in ("name", "catch_phrase", "photo_url")}

    try:
        await guest_service.register(values["name"], values["catch_phrase"], values["photo_url"] or None)
    except RegistrationError as e:
        return render_page(request, "home.html", {"form": values, "error": str(e)})
    except StoreError:
        logger.exception("error creating guest")
        return render_page(
            request,
            "home.html",
            {"form": values, "error": "Error creating guest profile. Please try again!"},
        )
    return RedirectResponse("/welcome", status_code=303)


async def welcome_page(request: Request) -> Response:
    """GET /welcome - the carnival rules and the list of games."""
    game_repo: GameRepository = request.app.state.game_repo
    try:
        games = await game_repo.list_games()
    except StoreError:
        logger.exception("error loading games for welcome page")
        games = []
    return render_page(request, "welcome.html", {"games": games})


async def leaderboard_page(request: Request) -> Response:
    """GET /leaderboard - public standings, kept live by the leaderboard WebSocket."""
    guest_repo: GuestRepository = request.app.state.guest_repo
    play_repo: PlayRepository = request.app.state.play_repo
    try:
        guests = await guest_repo.list_by_points()
        plays = await play_repo.list_plays()
    except StoreError:
        logger.exception("error fetching leaderboard")
        return render_page(
            request,
            "leaderboard.html",
            {"rows": [], "total_games": TOTAL_GAMES, "error": "Could not load the leaderboard. Please refresh!"},
        )
    return render_page(
        request,
        "leaderboard.html",
        {"rows": standings(guests, plays), "total_games": TOTAL_GAMES},
    )
