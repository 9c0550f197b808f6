"""Shared test fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.database import get_db_session


@pytest.fixture
def fake_db() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
async def client(fake_db: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with the DB session stubbed and an empty cache."""

    async def override_db() -> AsyncGenerator[MagicMock, None]:
        yield fake_db

    app.dependency_overrides[get_db_session] = override_db
    app.state.response_cache = ResponseCache()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
