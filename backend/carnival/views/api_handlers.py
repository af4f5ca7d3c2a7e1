"""JSON endpoints: health, public standings and staff guest search."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from starlette.responses import JSONResponse

from carnival.scoring.leaderboard import TOTAL_GAMES, game_champions, games_played_counts, standing_to_dict, standings
from carnival.scoring.search import filter_guests
from shared.build_info import APP_VERSION, GIT_COMMIT
from shared.dal.errors import StoreError

if TYPE_CHECKING:
    from starlette.requests import Request

logger = structlog.get_logger()


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "version": APP_VERSION, "commit": GIT_COMMIT})


async def api_leaderboard(request: Request) -> JSONResponse:
    state = request.app.state
    try:
        guests = await state.guest_repo.list_by_points()
        games = await state.game_repo.list_games()
        plays = await state.play_repo.list_plays()
    except StoreError:
        logger.exception("error fetching leaderboard")
        return JSONResponse({"error": "Could not load the leaderboard"}, status_code=503)

    champions = game_champions(games, plays, guests)
    return JSONResponse(
        {
            "total_games": TOTAL_GAMES,
            "guests": [standing_to_dict(row) for row in standings(guests, plays)],
            "champions": [
                {
                    "game_id": game.game_id,
                    "game_name": game.name,
                    "guest_id": champ.guest_id if champ else None,
                    "guest_name": champ.guest_name if champ else None,
                    "points": champ.points if champ else None,
                }
                for game in games
                for champ in [champions[game.game_id]]
            ],
        },
    )


async def api_guests(request: Request) -> JSONResponse:
    state = request.app.state
    query = request.query_params.get("q", "")
    try:
        guests = await state.guest_repo.list_by_name()
        plays = await state.play_repo.list_plays()
    except StoreError:
        logger.exception("error fetching guests")
        return JSONResponse({"error": "Could not load guests"}, status_code=503)

    played = games_played_counts(plays)
    return JSONResponse(
        {
            "guests": [
                {
                    "guest_id": g.guest_id,
                    "name": g.name,
                    "catch_phrase": g.catch_phrase,
                    "photo_url": g.photo_url,
                    "points": g.points,
                    "games_played": played[g.guest_id],
                }
                for g in filter_guests(guests, query)
            ],
        },
    )
