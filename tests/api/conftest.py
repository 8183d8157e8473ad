"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.main import app


@pytest.fixture
def overrides() -> Generator[dict, None, None]:
    """Dependency overrides, removed after the test."""
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest.fixture
async def client(overrides) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
