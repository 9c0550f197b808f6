# src/pb_food/domain/repository.py
"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_food.domain.models import Food
from src.pb_stats.domain.models import FoodRating


class FoodRepositoryProtocol(Protocol):
    async def list_foods(self, db: AsyncSession) -> list[Food]: ...

    async def list_foods_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[Food]: ...

    async def get_food_by_id(self, db: AsyncSession, food_id: int) -> Food | None: ...

    async def list_ratings(
        self, db: AsyncSession, food_ids: list[int] | None = None
    ) -> list[FoodRating]: ...
