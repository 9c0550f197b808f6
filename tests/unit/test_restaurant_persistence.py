# tests/unit/test_restaurant_persistence.py
"""Unit tests for RestaurantRepository using MagicMock AsyncSession."""
from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pb_restaurant.infrastructure.persistence import RestaurantRepository


def _make_restaurant_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.name = kwargs.get("name", "Campus Grill")
    row.description = kwargs.get("description", "Burgers and fries")
    row.location = kwargs.get("location", "Building 19")
    row.hours = kwargs.get("hours", "10-8")
    row.image_url = None
    row.created_at = datetime.now(UTC)
    row.menu_item_count = kwargs.get("menu_item_count", 3)
    return row


@pytest.fixture
def db():
    return MagicMock()


class TestListRestaurants:
    @pytest.mark.asyncio
    async def test_passes_limit_and_offset(self, db):
        result_mock = MagicMock()
        result_mock.fetchall.return_value = [_make_restaurant_row(id=i) for i in range(2)]
        db.execute = AsyncMock(return_value=result_mock)

        restaurants = await RestaurantRepository().list_restaurants(db, limit=2, offset=4)

        assert [r.id for r in restaurants] == [0, 1]
        assert db.execute.call_args.args[1] == {"limit": 2, "offset": 4}


class TestSearch:
    @pytest.mark.asyncio
    async def test_wraps_term_in_wildcards(self, db):
        result_mock = MagicMock()
        result_mock.fetchall.return_value = []
        db.execute = AsyncMock(return_value=result_mock)

        await RestaurantRepository().search_restaurants(db, "grill")

        assert db.execute.call_args.args[1] == {"term": "%grill%"}


class TestBulkLookups:
    @pytest.mark.asyncio
    async def test_empty_ids_skip_the_query(self, db):
        db.execute = AsyncMock()
        repo = RestaurantRepository()

        assert await repo.list_food_prices(db, []) == []
        assert await repo.list_food_ratings(db, []) == []
        assert await repo.list_general_ratings(db, []) == []
        db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_food_prices(self, db):
        row = MagicMock()
        row.food_id, row.restaurant_id, row.price = 5, 1, Decimal("8.50")
        result_mock = MagicMock()
        result_mock.fetchall.return_value = [row]
        db.execute = AsyncMock(return_value=result_mock)

        [price] = await RestaurantRepository().list_food_prices(db, [1])

        assert price.restaurant_id == 1
        assert price.price == Decimal("8.50")
