# tests/unit/test_routes.py
"""HTTP-level tests: caching, cache admin, error envelope.

Router-level services are replaced with mocks; the DB session is stubbed in
conftest, so nothing here touches Postgres.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from src.main import app
from src.pb_common.errors import FoodReviewNotFoundError, UserIdRequiredError
from src.pb_restaurant.api import router as restaurant_router
from src.pb_review.api import food_review_router


@pytest.fixture
def restaurant_service(monkeypatch):
    svc = MagicMock()
    monkeypatch.setattr(restaurant_router, "_service", svc)
    return svc


@pytest.fixture
def food_review_service(monkeypatch):
    svc = MagicMock()
    monkeypatch.setattr(food_review_router, "_service", svc)
    return svc


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.headers["X-Request-ID"].startswith("req_")


class TestReadThrough:
    @pytest.mark.asyncio
    async def test_second_get_served_from_cache(self, client, restaurant_service):
        restaurant_service.get_restaurant = AsyncMock(
            return_value={"id": 3, "name": "Campus Grill"}
        )

        first = await client.get("/api/restaurants/3")
        second = await client.get("/api/restaurants/3")

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json() == {"id": 3, "name": "Campus Grill"}
        restaurant_service.get_restaurant.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_query_string_is_part_of_the_key(self, client, restaurant_service):
        restaurant_service.list_restaurants = AsyncMock(return_value={"data": []})

        await client.get("/api/restaurants?page=1&limit=5")
        await client.get("/api/restaurants?page=1&limit=5")
        await client.get("/api/restaurants?page=2&limit=5")
        # parameter order is not normalized
        await client.get("/api/restaurants?limit=5&page=1")

        assert restaurant_service.list_restaurants.await_count == 3

    @pytest.mark.asyncio
    async def test_errors_are_not_cached(self, client, food_review_service):
        food_review_service.get_review = AsyncMock(side_effect=FoodReviewNotFoundError(7))

        await client.get("/api/food-reviews/7")
        await client.get("/api/food-reviews/7")

        assert food_review_service.get_review.await_count == 2


class TestCacheAdmin:
    @pytest.mark.asyncio
    async def test_stats_and_clear(self, client, restaurant_service):
        restaurant_service.get_restaurant = AsyncMock(return_value={"id": 3})
        await client.get("/api/restaurants/3")
        await client.get("/api/restaurants/3")

        stats = (await client.get("/api/cache/stats")).json()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["keys"] == 1
        assert stats["hit_rate"] == 0.5

        cleared = (await client.post("/api/cache/clear")).json()
        assert cleared == {"cleared": 1}
        assert len(app.state.response_cache) == 0


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_app_error_shape(self, client, food_review_service):
        food_review_service.get_review = AsyncMock(side_effect=FoodReviewNotFoundError(7))

        resp = await client.get("/api/food-reviews/7")

        assert resp.status_code == 404
        body = resp.json()
        assert body["code"] == 4001
        assert body["error"] == "Food review not found: 7"
        assert "timestamp" in body
        assert body["request_id"] == resp.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_delete_without_body_reaches_service(self, client, food_review_service):
        food_review_service.delete_review = AsyncMock(side_effect=UserIdRequiredError())

        resp = await client.delete("/api/food-reviews/7")

        assert resp.status_code == 400
        assert resp.json()["error"] == "User ID is required"
        assert food_review_service.delete_review.call_args.args[2] is None

    @pytest.mark.asyncio
    async def test_invalid_rating_is_422(self, client, food_review_service):
        food_review_service.create_review = AsyncMock()

        resp = await client.post(
            "/api/food-reviews", json={"user_id": "u", "food_id": 5, "rating": 9}
        )

        assert resp.status_code == 422
        food_review_service.create_review.assert_not_called()
