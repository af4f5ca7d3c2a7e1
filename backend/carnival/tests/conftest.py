"""Shared fixtures for carnival tests: a temp SQLite store and staff identities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest

from shared.dal.models import Game, Guest
from shared.db import Database, SqliteGameRepository, SqliteGuestRepository, SqlitePlayRepository

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class Staff:
    email: str
    is_super_admin: bool = False


RING_TOSS = Game(game_id="ring-toss", name="Ring Toss", assigned_user_email="a@x.com")
DUCK_HUNT = Game(game_id="duck-hunt", name="Duck Hunt", assigned_user_email="b@x.com")
PLINKO = Game(game_id="plinko", name="Plinko", assigned_user_email="a@x.com")
BALLOON_DARTS = Game(game_id="balloon-darts", name="Balloon Darts")
ALL_GAMES = [RING_TOSS, DUCK_HUNT, PLINKO, BALLOON_DARTS]


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
async def games(game_repo):
    await game_repo.seed_games(ALL_GAMES)
    return ALL_GAMES


@pytest.fixture
async def max_guest(guest_repo):
    guest = Guest(guest_id="g-max", name="Max", catch_phrase="Ringmaster of fun")
    await guest_repo.create_guest(guest)
    return guest
