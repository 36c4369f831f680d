"""Shared pytest fixtures."""

from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import pytest
from fakes import FakeDatabase
from fastapi.testclient import TestClient

from taskboard.app import App
from taskboard.config import Config
from taskboard.core.core import Core
from taskboard.web.server import create_fastapi_app

TEST_PASSWORD = "secret123"


@pytest.fixture
def config():
    """Configuration with a fast bcrypt cost and a fixed signing key."""
    return Config(
        database_url="mongodb://localhost:27017/taskboard-test",
        jwt_secret="test-signing-key-that-is-long-enough-for-hs256",
        bcrypt_rounds=4,
        debug=True,
    )


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
async def core(config, database) -> AsyncIterator[Core]:
    """Started Core backed by the in-memory database."""
    core = Core(config, database)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
def client(config, database) -> Iterator[TestClient]:
    """HTTP client for the full FastAPI app, lifespan included."""
    app = App(config, database)  # type: ignore[arg-type]
    with TestClient(create_fastapi_app(app, config)) as test_client:
        yield test_client


@pytest.fixture
def register_user(client) -> Callable[..., dict[str, Any]]:
    """Register an account through the API and return the response body (token included)."""

    def _register(email: str = "alice@example.com", name: str = "Alice", password: str = TEST_PASSWORD) -> dict[str, Any]:
        response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def alice(register_user) -> dict[str, Any]:
    return register_user("alice@example.com", "Alice")


@pytest.fixture
def bob(register_user) -> dict[str, Any]:
    return register_user("bob@example.com", "Bob")
