"""Integration-test fixtures.

Requires a migrated Postgres at settings.DATABASE_URL (alembic upgrade head).
The whole module is skipped when the database cannot be reached.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) stays valid across
the session.
"""

import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.main import app
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.database import engine


@dataclass(frozen=True)
class Seed:
    restaurant_id: int
    food_id: int
    user_id: str


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Session-scoped client against the real database, with a fresh cache."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as exc:
        pytest.skip(f"database unavailable: {exc}")

    app.dependency_overrides.clear()
    app.state.response_cache = ResponseCache()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def seed(client: AsyncClient) -> AsyncGenerator[Seed, None]:
    """One restaurant with one priced food and one auth user; removed afterwards."""
    user_id = str(uuid.uuid4())
    async with engine.begin() as conn:
        restaurant_id = (await conn.execute(text(
            "INSERT INTO restaurants (name, description) "
            "VALUES ('Integration Grill', 'Burgers') RETURNING id"
        ))).scalar_one()
        food_id = (await conn.execute(text(
            "INSERT INTO foods (restaurant_id, name, price) "
            "VALUES (:rid, 'Test Burger', 8.00) RETURNING id"
        ), {"rid": restaurant_id})).scalar_one()
        await conn.execute(
            text("INSERT INTO auth.users (id, email) VALUES (:id, :email)"),
            {"id": user_id, "email": f"{user_id}@example.com"},
        )

    yield Seed(restaurant_id=restaurant_id, food_id=food_id, user_id=user_id)

    async with engine.begin() as conn:
        await conn.execute(text(
            "DELETE FROM likes WHERE food_review_id IN "
            "(SELECT id FROM food_reviews WHERE food_id = :fid)"
        ), {"fid": food_id})
        await conn.execute(text(
            "DELETE FROM general_review_likes WHERE general_review_id IN "
            "(SELECT id FROM general_reviews WHERE restaurant_id = :rid)"
        ), {"rid": restaurant_id})
        await conn.execute(text(
            "DELETE FROM general_review_reports WHERE general_review_id IN "
            "(SELECT id FROM general_reviews WHERE restaurant_id = :rid)"
        ), {"rid": restaurant_id})
        await conn.execute(text("DELETE FROM profiles WHERE auth_id = :uid"), {"uid": user_id})
        await conn.execute(text("DELETE FROM restaurants WHERE id = :rid"), {"rid": restaurant_id})
        await conn.execute(text("DELETE FROM auth.users WHERE id = :uid"), {"uid": user_id})
