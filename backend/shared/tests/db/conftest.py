from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shared.dal.models import Game, Guest
from shared.db import (
    Database,
    SqliteGameRepository,
    SqliteGuestRepository,
    SqlitePlayRepository,
)

if TYPE_CHECKING:
    from pathlib import Path

_SEED_GAMES = [
    Game(game_id="ring-toss", name="Ring Toss", assigned_user_email="a@x.com"),
    Game(game_id="plinko", name="Plinko"),
]


@pytest.fixture
def db(tmp_path: Path):
    database = Database(tmp_path / "carnival.db")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def guest_repo(db):
    return SqliteGuestRepository(db)


@pytest.fixture
def game_repo(db):
    return SqliteGameRepository(db)


@pytest.fixture
def play_repo(db):
    return SqlitePlayRepository(db)


@pytest.fixture
async def seeded(guest_repo, game_repo):
    """Two games and one guest, Max."""
    await game_repo.seed_games(_SEED_GAMES)
    max_ = Guest(guest_id="g-max", name="Max", catch_phrase="Born to toss")
    await guest_repo.create_guest(max_)
    return max_
