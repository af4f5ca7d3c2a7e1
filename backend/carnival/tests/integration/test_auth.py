from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from carnival.auth.backend import SESSION_COOKIE_NAME
from carnival.tests.integration.conftest import PASSWORD, csrf_token, login


class TestLogin:
    def test_login_page_renders(self, client):
        response = client.get("/login?next=/admin/leaderboard")
        assert response.status_code == 200
        assert 'name="next" value="/admin/leaderboard"' in response.text

    def test_login_sets_session_and_redirects_to_next(self, client):
        response = login(client, "a@x.com", next_path="/admin/leaderboard")

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/leaderboard"
        assert SESSION_COOKIE_NAME in response.cookies

    def test_login_email_ignores_case(self, client):
        assert login(client, "A@X.COM").status_code == 303

    def test_offsite_next_falls_back_to_admin(self, client):
        response = login(client, "a@x.com", next_path="//evil.test/")

        assert response.headers["location"] == "/admin"

    def test_wrong_password_shows_error(self, client):
        token = csrf_token(client, "/login")
        response = client.post(
            "/login",
            data={"email": "a@x.com", "password": "wrongpassword", "next": "/admin", "csrf_token": token},
        )

        assert response.status_code == 200
        assert "Invalid login credentials" in response.text
        assert SESSION_COOKIE_NAME not in client.cookies

    def test_login_without_csrf_rejected(self, client):
        response = client.post("/login", data={"email": "a@x.com", "password": PASSWORD, "next": "/admin"})

        assert response.status_code == 403

    def test_signed_in_staff_skip_login_page(self, client):
        login(client, "a@x.com")

        response = client.get("/login", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/admin"


class TestProtectedPages:
    def test_admin_redirects_anonymous_to_login(self, client):
        response = client.get("/admin?game=plinko", follow_redirects=False)

        assert response.status_code == 303
        location = urlparse(response.headers["location"])
        assert location.path == "/login"
        assert parse_qs(location.query) == {"next": ["/admin?game=plinko"]}

    def test_trailing_slash_does_not_bypass_auth(self, client):
        response = client.get("/admin/", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/login")

    def test_admin_post_redirects_anonymous(self, client):
        response = client.post("/admin/plays", data={}, follow_redirects=False)

        assert response.status_code == 303

    def test_api_guests_returns_json_401(self, client):
        response = client.get("/api/guests")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}


class TestLogout:
    def test_logout_ends_session_and_goes_home(self, client):
        login(client, "a@x.com")
        token = csrf_token(client, "/admin")

        response = client.post("/logout", data={"csrf_token": token}, follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert client.get("/admin", follow_redirects=False).status_code == 303

    def test_logout_without_csrf_rejected(self, client):
        login(client, "a@x.com")

        response = client.post("/logout", data={})

        assert response.status_code == 403
        assert client.get("/admin", follow_redirects=False).status_code == 200
