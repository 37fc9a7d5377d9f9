"""HTTP tests for registration, login and token handling."""

import sqlite3
from contextlib import closing
from datetime import timedelta

from conftest import TEST_SECRET, auth_headers, register_user

from activityrec.core.modules.session.tokens import issue_token, verify_token
from activityrec.utils import now


def count_users(config) -> int:
    db_path = config.database_url.removeprefix("sqlite+aiosqlite:///")
    with closing(sqlite3.connect(db_path)) as conn:
        return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]


class TestRegister:
    def test_register_returns_token_and_public_user(self, client):
        body = register_user(client, "Ann", "ann@x.com", "password123")
        assert body["message"] == "User registered successfully"
        assert body["user"]["name"] == "Ann"
        assert body["user"]["email"] == "ann@x.com"
        assert set(body["user"]) == {"id", "name", "email"}
        assert verify_token(body["token"], TEST_SECRET).user_id == body["user"]["id"]

    def test_email_case_preserved(self, client):
        body = register_user(client, "Ann", "Ann.Smith@X.com", "password123")
        assert body["user"]["email"] == "Ann.Smith@X.com"

    def test_user_ids_increase(self, client):
        first = register_user(client, "Ann", "ann@x.com")
        second = register_user(client, "Bob", "bob@x.com")
        assert second["user"]["id"] > first["user"]["id"]

    def test_duplicate_email_conflict(self, client, config):
        register_user(client, "Ann", "ann@x.com")
        assert count_users(config) == 1
        response = client.post("/api/auth/register", json={"name": "Other", "email": "ann@x.com", "password": "password456"})
        assert response.status_code == 409
        assert response.json()["error"] == "User with this email already exists"
        assert count_users(config) == 1

        # The original account still logs in with its own password only
        assert client.post("/api/auth/login", json={"email": "ann@x.com", "password": "password123"}).status_code == 200
        assert client.post("/api/auth/login", json={"email": "ann@x.com", "password": "password456"}).status_code == 401

    def test_validation_failure_has_field_details(self, client):
        response = client.post("/api/auth/register", json={"name": "A", "email": "not-an-email", "password": "short"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert body["type"] == "validation_error"
        assert {detail["field"] for detail in body["details"]} == {"name", "email", "password"}

    def test_missing_fields(self, client):
        response = client.post("/api/auth/register", json={})
        assert response.status_code == 400
        assert {detail["field"] for detail in response.json()["details"]} == {"name", "email", "password"}

    def test_blank_name_rejected(self, client):
        response = client.post("/api/auth/register", json={"name": "   ", "email": "ann@x.com", "password": "password123"})
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "name"

    def test_name_too_short_after_trimming(self, client):
        response = client.post("/api/auth/register", json={"name": "  a  ", "email": "ann@x.com", "password": "password123"})
        assert response.status_code == 400
        assert [detail["field"] for detail in response.json()["details"]] == ["name"]

    def test_name_stored_trimmed(self, client):
        body = register_user(client, "  Ann  ", "ann@x.com")
        assert body["user"]["name"] == "Ann"


class TestLogin:
    def test_login_success(self, client):
        registered = register_user(client)
        response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "password123"})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["user"] == registered["user"]
        assert body["token"] != registered["token"]
        assert verify_token(body["token"], TEST_SECRET).user_id == registered["user"]["id"]

    def test_wrong_password_and_unknown_email_indistinguishable(self, client):
        register_user(client)
        wrong_password = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "wrong-password"})
        unknown_email = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "password123"})
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()
        assert wrong_password.json()["error"] == "Invalid email or password"

    def test_invalid_email_shape(self, client):
        response = client.post("/api/auth/login", json={"email": "ann", "password": "password123"})
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "email"


class TestCurrentUser:
    def test_me_returns_token_owner(self, client):
        registered = register_user(client)
        response = client.get("/api/auth/me", headers=auth_headers(registered["token"]))
        assert response.status_code == 200
        assert response.json() == registered["user"]

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["error"] == "Access token required"

    def test_non_bearer_scheme(self, client):
        registered = register_user(client)
        response = client.get("/api/auth/me", headers={"Authorization": f"Basic {registered['token']}"})
        assert response.status_code == 401

    def test_expired_token(self, client):
        registered = register_user(client)
        token = issue_token(
            registered["user"]["id"], "ann@x.com", TEST_SECRET, timedelta(days=7), issued_at=now() - timedelta(days=8)
        )
        response = client.get("/api/auth/me", headers=auth_headers(token))
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"

    def test_token_signed_with_other_secret(self, client):
        registered = register_user(client)
        token = issue_token(registered["user"]["id"], "ann@x.com", "some-other-secret-0123456789abcdef", timedelta(days=1))
        assert client.get("/api/auth/me", headers=auth_headers(token)).status_code == 401

    def test_token_for_vanished_user(self, client):
        token = issue_token(999, "ghost@x.com", TEST_SECRET, timedelta(days=1))
        assert client.get("/api/auth/me", headers=auth_headers(token)).status_code == 404


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "timestamp" in body
