# src/pb_restaurant/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_restaurant.domain.models import Restaurant, RestaurantReview
from src.pb_stats.domain.models import FoodPrice, FoodRating, RestaurantRating


class RestaurantRepositoryProtocol(Protocol):
    async def count_restaurants(self, db: AsyncSession) -> int: ...

    async def list_restaurants(
        self, db: AsyncSession, limit: int, offset: int
    ) -> list[Restaurant]: ...

    async def get_restaurant_by_id(
        self, db: AsyncSession, restaurant_id: int
    ) -> Restaurant | None: ...

    async def search_restaurants(
        self, db: AsyncSession, term: str
    ) -> list[Restaurant]: ...

    async def list_food_prices(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> list[FoodPrice]: ...

    async def list_food_ratings(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> list[FoodRating]: ...

    async def list_general_ratings(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> list[RestaurantRating]: ...

    async def list_restaurant_reviews(self, db: AsyncSession) -> list[RestaurantReview]: ...
