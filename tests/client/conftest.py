"""Fixtures wiring the client package to the in-process API."""

from collections.abc import AsyncIterator

import httpx
import pytest

from taskboard.app import App
from taskboard.client.api import ApiClient
from taskboard.client.session import Session
from taskboard.client.storage import TokenStorage
from taskboard.web.server import create_fastapi_app


@pytest.fixture
async def asgi_transport(config, database) -> AsyncIterator[httpx.ASGITransport]:
    """Transport into the FastAPI app with its lifespan running."""
    fastapi_app = create_fastapi_app(App(config, database), config)
    async with fastapi_app.router.lifespan_context(fastapi_app):
        yield httpx.ASGITransport(app=fastapi_app)


@pytest.fixture
async def api(asgi_transport) -> AsyncIterator[ApiClient]:
    client = ApiClient("http://testserver/api", transport=asgi_transport)
    yield client
    await client.aclose()


@pytest.fixture
def storage(tmp_path) -> TokenStorage:
    return TokenStorage(tmp_path / "session" / "token.json")


@pytest.fixture
def session(api, storage) -> Session:
    return Session(api, storage)
