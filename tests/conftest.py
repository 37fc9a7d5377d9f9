"""Shared pytest fixtures."""

from collections.abc import Callable, Iterator
from contextlib import ExitStack
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from activityrec.app import App
from activityrec.config import Config
from activityrec.web.server import create_fastapi_app

TEST_SECRET = "test-signing-secret-0123456789abcdef"


@pytest.fixture
def config_factory(tmp_path: Path) -> Callable[..., Config]:
    """Build a Config backed by a temp-dir SQLite database and upload folder."""

    def factory(**overrides: Any) -> Config:
        values: dict[str, Any] = {
            "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            "jwt_secret": TEST_SECRET,
            "bcrypt_rounds": 4,
            "uploads_path": str(tmp_path / "uploads"),
            "public_path": str(tmp_path / "public"),
        }
        values.update(overrides)
        return Config(_env_file=None, **values)

    return factory


@pytest.fixture
def config(config_factory) -> Config:
    return config_factory()


@pytest.fixture
def client_factory(config_factory) -> Iterator[Callable[..., TestClient]]:
    """Start the full application (lifespan included) and return a TestClient for it."""
    with ExitStack() as stack:

        def factory(raise_server_exceptions: bool = True, **overrides: Any) -> TestClient:
            config = config_factory(**overrides)
            fastapi_app = create_fastapi_app(App(config), config)
            return stack.enter_context(TestClient(fastapi_app, raise_server_exceptions=raise_server_exceptions))

        yield factory


@pytest.fixture
def client(client_factory) -> TestClient:
    return client_factory()


@pytest.fixture
def uploads_dir(config) -> Path:
    return Path(config.uploads_path)


def register_user(client: TestClient, name: str = "Ann", email: str = "ann@x.com", password: str = "password123") -> dict:
    """Register a user and return the response body (token and user)."""
    response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def upload(client: TestClient, token: str, content: bytes = b"webm-bytes", mime_type: str = "video/webm", filename: str = "clip.webm"):
    return client.post(
        "/api/recordings",
        headers=auth_headers(token),
        files={"recording": (filename, content, mime_type)},
    )
