from __future__ import annotations

from unittest.mock import patch

from carnival.tests.integration.conftest import csrf_token, register_guest
from shared.dal.errors import StoreError


class TestRegistration:
    def test_home_page_renders_form_with_csrf(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert 'name="catch_phrase"' in response.text
        assert 'name="csrf_token"' in response.text

    def test_register_redirects_to_welcome(self, client):
        token = csrf_token(client)
        response = client.post(
            "/",
            data={"name": "Max", "catch_phrase": "Ringmaster of fun", "photo_url": "", "csrf_token": token},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/welcome"

    def test_missing_name_shows_error_and_keeps_input(self, client):
        token = csrf_token(client)
        response = client.post(
            "/",
            data={"name": " ", "catch_phrase": "Ringmaster of fun", "photo_url": "", "csrf_token": token},
        )

        assert response.status_code == 200
        assert "Please enter your stage name!" in response.text
        assert 'value="Ringmaster of fun"' in response.text

    def test_store_failure_shows_generic_error(self, client):
        token = csrf_token(client)
        guest_repo = client.app.state.guest_repo
        with patch.object(guest_repo, "create_guest", side_effect=StoreError("disk full")):
            response = client.post(
                "/",
                data={"name": "Max", "catch_phrase": "Hi", "photo_url": "", "csrf_token": token},
            )

        assert "Error creating guest profile. Please try again!" in response.text

    def test_without_csrf_rejected(self, client):
        response = client.post("/", data={"name": "Max", "catch_phrase": "Hi"})

        assert response.status_code == 403
        assert "Please reload the page" in response.text


class TestWelcome:
    def test_lists_games(self, client):
        page = client.get("/welcome").text

        for name in ("Ring Toss", "Duck Hunt", "Plinko", "Balloon Darts"):
            assert name in page


class TestPublicLeaderboard:
    def test_orders_by_points_and_loads_live_script(self, client):
        register_guest(client, "Max")
        register_guest(client, "Luna")

        response = client.get("/leaderboard")

        assert response.status_code == 200
        assert response.text.index("Max") < response.text.index("Luna")
        assert "/static/scripts/leaderboard.js" in response.text
        assert "0/4" in response.text

    def test_static_assets_served(self, client):
        assert client.get("/static/scripts/leaderboard.js").status_code == 200
        assert client.get("/static/styles/carnival.css").status_code == 200

    def test_security_headers_present(self, client):
        assert "script-src 'self'" in client.get("/leaderboard").headers["content-security-policy"]
