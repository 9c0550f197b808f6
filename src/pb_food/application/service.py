"""FoodApplicationService — read-only composition of foods and their stats."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_common.errors import FoodNotFoundError
from src.pb_common.response import data_response
from src.pb_food.application.schemas import FoodWithStats
from src.pb_food.domain.models import Food
from src.pb_food.domain.repository import FoodRepositoryProtocol
from src.pb_food.infrastructure.persistence import FoodRepository
from src.pb_stats.domain.models import FoodRating
from src.pb_stats.domain.stats import food_stats, group_ratings


def _with_stats(foods: list[Food], ratings: list[FoodRating]) -> list[FoodWithStats]:
    by_food = group_ratings(ratings, "food_id")
    return [
        FoodWithStats.from_domain(f, food_stats(by_food.get(f.id, []), f.price))
        for f in foods
    ]


class FoodApplicationService:
    def __init__(self, repo: FoodRepositoryProtocol | None = None) -> None:
        self._repo: FoodRepositoryProtocol = repo or FoodRepository()

    async def list_foods(self, db: AsyncSession) -> dict[str, Any]:
        foods = await self._repo.list_foods(db)
        ratings = await self._repo.list_ratings(db)
        return data_response([f.model_dump() for f in _with_stats(foods, ratings)])

    async def list_foods_by_restaurant(
        self, db: AsyncSession, restaurant_id: int, q: str | None = None
    ) -> list[FoodWithStats]:
        """Foods of one restaurant; a non-blank `q` filters on name/description."""
        foods = await self._repo.list_foods_by_restaurant(db, restaurant_id)
        ratings = await self._repo.list_ratings(db, [f.id for f in foods])
        items = _with_stats(foods, ratings)
        if q and q.strip():
            term = q.strip()
            items = [item for item in items if item.matches(term)]
        return items

    async def get_food(self, db: AsyncSession, food_id: int) -> FoodWithStats:
        food = await self._repo.get_food_by_id(db, food_id)
        if food is None:
            raise FoodNotFoundError(food_id)
        ratings = await self._repo.list_ratings(db, [food.id])
        return _with_stats([food], ratings)[0]
