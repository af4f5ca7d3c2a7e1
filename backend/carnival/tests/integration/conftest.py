"""App fixtures for carnival integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from starlette.testclient import TestClient

from carnival.server.app import create_app
from carnival.server.csrf import CSRF_COOKIE_NAME
from carnival.server.settings import CarnivalServerSettings
from shared.auth.models import StaffRole
from shared.auth.settings import AuthSettings

if TYPE_CHECKING:
    from pathlib import Path

PASSWORD = "securepass123"

ROSTER_YAML = """\
games:
  - name: "Ring Toss"
    assigned_email: "a@x.com"
  - name: "Duck Hunt"
    assigned_email: "b@x.com"
  - name: "Plinko"
    assigned_email: "a@x.com"
  - name: "Balloon Darts"
"""


@pytest.fixture
def app(tmp_path: Path):
    roster = tmp_path / "roster.yaml"
    roster.write_text(ROSTER_YAML)
    return create_app(
        settings=CarnivalServerSettings(roster_path=roster, ws_allowed_origin=None),
        auth_settings=AuthSettings(database_path=str(tmp_path / "carnival.db"), password_hasher="simple"),
    )


@pytest.fixture
def client(app):
    """Client with the lifespan running (games seeded) and three staff accounts."""
    with TestClient(app) as c:
        auth_service = app.state.auth_service
        c.portal.call(auth_service.register_staff, "a@x.com", PASSWORD, StaffRole.STAFF)
        c.portal.call(auth_service.register_staff, "nobody@x.com", PASSWORD, StaffRole.STAFF)
        c.portal.call(auth_service.register_staff, "boss@x.com", PASSWORD, StaffRole.SUPER_ADMIN)
        yield c


def csrf_token(client: TestClient, path: str = "/") -> str:
    """GET a page so the CSRF cookie is set, then return it."""
    response = client.get(path)
    return response.cookies.get(CSRF_COOKIE_NAME) or client.cookies.get(CSRF_COOKIE_NAME)


def login(client: TestClient, email: str, next_path: str = "/admin"):
    token = csrf_token(client, "/login")
    return client.post(
        "/login",
        data={"email": email, "password": PASSWORD, "next": next_path, "csrf_token": token},
        follow_redirects=False,
    )


def register_guest(client: TestClient, name: str, catch_phrase: str = "Here for the prizes") -> None:
    token = csrf_token(client)
    response = client.post(
        "/",
        data={"name": name, "catch_phrase": catch_phrase, "photo_url": "", "csrf_token": token},
        follow_redirects=False,
    )
    assert response.status_code == 303


def guest_id_by_name(client: TestClient, name: str) -> str:
    guests = client.get("/api/leaderboard").json()["guests"]
    return next(g["guest_id"] for g in guests if g["name"] == name)
