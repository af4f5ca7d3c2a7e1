"""Staff pages: point entry per game and the admin leaderboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlencode

import structlog
from starlette.responses import RedirectResponse

from carnival.scoring.entry_state import PointEntryState, entry_state, find_play
from carnival.scoring.errors import AlreadyPlayedError, ScoringError
from carnival.scoring.leaderboard import TOTAL_GAMES, game_champions, games_played_counts, leaderboard_stats, standings
from carnival.scoring.permissions import available_games, default_game
from carnival.scoring.search import filter_guests
from carnival.server.csrf import read_checked_form
from carnival.views.assets import render_page
from shared.dal.errors import StoreError

if TYPE_CHECKING:
    from starlette.datastructures import FormData
    from starlette.requests import Request
    from starlette.responses import Response

    from carnival.scoring.service import ScoringService
    from shared.dal.models import Guest

logger = structlog.get_logger()


@dataclass(frozen=True)
class GuestEntryRow:
    """One guest line on the admin page for the selected game."""

    guest: Guest
    state: PointEntryState
    game_points: int | None  # points already awarded for the selected game
    games_played: int


def _admin_url(game_id: str | None = None, query: str = "", **extra: str) -> str:
    params = {"game": game_id or "", "q": query, **extra}
    encoded = urlencode({k: v for k, v in params.items() if v})
    return f"/admin?{encoded}" if encoded else "/admin"


def _form_text(form: FormData, key: str) -> str:
    value = form.get(key)
    return value if isinstance(value, str) else ""


async def _render_admin(
    request: Request,
    *,
    game_id: str | None,
    query: str = "",
    editing_guest_id: str | None = None,
    error: str | None = None,
    notice: str | None = None,
) -> Response:
    state = request.app.state
    staff = request.user
    try:
        games = await state.game_repo.list_games()
        guests = await state.guest_repo.list_by_name()
        plays = await state.play_repo.list_plays()
    except StoreError:
        logger.exception("error fetching admin data", email=staff.email)
        games, guests, plays = [], [], []
        error = error or "Could not load carnival data. Please refresh!"

    manageable = available_games(staff, games)
    if not manageable and not staff.is_super_admin and error is None:
        return render_page(request, "admin_no_games.html")

    selected = next((g for g in manageable if g.game_id == game_id), None) or default_game(staff, games)
    played = games_played_counts(plays)
    rows = []
    if selected is not None:
        for guest in filter_guests(guests, query):
            play = find_play(plays, guest.guest_id, selected.game_id)
            rows.append(
                GuestEntryRow(
                    guest=guest,
                    state=entry_state(plays, guest.guest_id, selected.game_id, editing_guest_id),
                    game_points=play.points_awarded if play is not None else None,
                    games_played=played[guest.guest_id],
                ),
            )

    return render_page(
        request,
        "admin.html",
        {
            "games": manageable,
            "selected_game": selected,
            "query": query,
            "rows": rows,
            "total_guests": len(guests),
            "total_games": TOTAL_GAMES,
            "error": error,
            "notice": notice,
        },
    )


async def admin_page(request: Request) -> Response:
    """GET /admin?game=&q=&edit= - guests with award or re-enter controls for one game."""
    params = request.query_params
    notice = None
    if params.get("awarded"):
        notice = "Points awarded!"
    elif params.get("updated"):
        notice = "Score updated!"
    return await _render_admin(
        request,
        game_id=params.get("game"),
        query=params.get("q", ""),
        editing_guest_id=params.get("edit"),
        notice=notice,
    )


async def award_points(request: Request) -> Response:
    """POST /admin/plays - record a first play of the selected game."""
    form, rejected = await read_checked_form(request)
    if rejected:
        return rejected

    scoring: ScoringService = request.app.state.scoring_service
    guest_id = _form_text(form, "guest_id")
    game_id = _form_text(form, "game_id") or None
    query = _form_text(form, "q")

    try:
        await scoring.award_points(request.user, guest_id, game_id, _form_text(form, "points"))
    except AlreadyPlayedError as e:
        # Offer the re-enter path straight away.
        return await _render_admin(request, game_id=game_id, query=query, editing_guest_id=guest_id, error=str(e))
    except ScoringError as e:
        return await _render_admin(request, game_id=game_id, query=query, error=str(e))
    except StoreError:
        logger.exception("error awarding points", guest_id=guest_id, game_id=game_id)
        return await _render_admin(request, game_id=game_id, query=query, error="Error awarding points!")
    return RedirectResponse(_admin_url(game_id, query, awarded=guest_id), status_code=303)


async def update_points(request: Request) -> Response:
    """POST /admin/plays/update - re-enter the score of an existing play."""
    form, rejected = await read_checked_form(request)
    if rejected:
        return rejected

    scoring: ScoringService = request.app.state.scoring_service
    guest_id = _form_text(form, "guest_id")
    game_id = _form_text(form, "game_id") or None
    query = _form_text(form, "q")

    try:
        await scoring.update_points(request.user, guest_id, game_id, _form_text(form, "points"))
    except ScoringError as e:
        return await _render_admin(request, game_id=game_id, query=query, editing_guest_id=guest_id, error=str(e))
    except StoreError:
        logger.exception("error updating points", guest_id=guest_id, game_id=game_id)
        return await _render_admin(
            request,
            game_id=game_id,
            query=query,
            editing_guest_id=guest_id,
            error="Error updating points!",
        )
    return RedirectResponse(_admin_url(game_id, query, updated=guest_id), status_code=303)


async def assign_game(request: Request) -> Response:
    """POST /admin/games/{game_id}/assign - super admins hand a game to a staff email."""
    form, rejected = await read_checked_form(request)
    if rejected:
        return rejected

    scoring: ScoringService = request.app.state.scoring_service
    game_id = request.path_params["game_id"]
    try:
        await scoring.assign_game(request.user, game_id, _form_text(form, "email"))
    except ScoringError as e:
        return await _render_admin(request, game_id=game_id, error=str(e))
    except StoreError:
        logger.exception("error assigning game", game_id=game_id)
        return await _render_admin(request, game_id=game_id, error="Error assigning game!")
    return RedirectResponse(_admin_url(game_id), status_code=303)


async def admin_leaderboard_page(request: Request) -> Response:
    """GET /admin/leaderboard - per-game champions, full standings and totals."""
    state = request.app.state
    try:
        guests = await state.guest_repo.list_by_points()
        games = await state.game_repo.list_games()
        plays = await state.play_repo.list_plays()
    except StoreError:
        logger.exception("error fetching leaderboard")
        guests, games, plays = [], [], []
        error = "Could not load the leaderboard. Please refresh!"
    else:
        error = None

    champions = game_champions(games, plays, guests)
    return render_page(
        request,
        "admin_leaderboard.html",
        {
            "games": games,
            "champions": champions,
            "rows": standings(guests, plays),
            "stats": leaderboard_stats(guests, games, plays),
            "total_games": TOTAL_GAMES,
            "error": error,
        },
    )
