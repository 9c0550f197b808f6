# src/pb_review/domain/repository.py
"""Repository Protocols — dependency inversion for testability.

Unit tests inject mocks that conform to these Protocols.
Infrastructure layer provides the real implementations.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_review.domain.models import (
    FoodReview,
    GeneralReview,
    GeneralReviewReport,
    RestaurantSummary,
)
from src.pb_stats.domain.models import FoodRating, RestaurantRating


class FoodReviewRepositoryProtocol(Protocol):
    async def list_reviews(self, db: AsyncSession) -> list[FoodReview]: ...

    async def get_review(self, db: AsyncSession, review_id: int) -> FoodReview | None: ...

    async def list_by_food(self, db: AsyncSession, food_id: int) -> list[FoodReview]: ...

    async def list_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[FoodReview]: ...

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[FoodReview]: ...

    async def list_ratings_for_food(
        self, db: AsyncSession, food_id: int
    ) -> list[FoodRating]: ...

    async def list_food_ids_for_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[int]: ...

    async def list_ratings_for_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[FoodRating]: ...

    async def list_restaurants(self, db: AsyncSession) -> list[RestaurantSummary]: ...

    async def list_ratings_by_restaurant(self, db: AsyncSession) -> list[RestaurantRating]: ...

    async def food_exists(self, db: AsyncSession, food_id: int) -> bool: ...

    async def create_review(
        self,
        db: AsyncSession,
        user_id: str,
        food_id: int,
        rating: int,
        text: str | None,
        anonymous: bool,
    ) -> FoodReview: ...

    async def delete_review(self, db: AsyncSession, review_id: int) -> None: ...

    async def has_like(self, db: AsyncSession, review_id: int, user_id: str) -> bool: ...

    async def add_like(self, db: AsyncSession, review_id: int, user_id: str) -> None: ...

    async def remove_like(self, db: AsyncSession, review_id: int, user_id: str) -> None: ...

    async def count_likes(self, db: AsyncSession, review_id: int) -> int: ...


class GeneralReviewRepositoryProtocol(Protocol):
    async def list_reviews(self, db: AsyncSession) -> list[GeneralReview]: ...

    async def get_review(self, db: AsyncSession, review_id: int) -> GeneralReview | None: ...

    async def list_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[GeneralReview]: ...

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[GeneralReview]: ...

    async def list_ratings_for_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[RestaurantRating]: ...

    async def restaurant_exists(self, db: AsyncSession, restaurant_id: int) -> bool: ...

    async def create_review(
        self,
        db: AsyncSession,
        user_id: str,
        restaurant_id: int,
        rating: int,
        text: str | None,
        anonymous: bool,
    ) -> GeneralReview: ...

    async def delete_review(self, db: AsyncSession, review_id: int) -> None: ...

    async def has_like(self, db: AsyncSession, review_id: int, user_id: str) -> bool: ...

    async def add_like(self, db: AsyncSession, review_id: int, user_id: str) -> None: ...

    async def remove_like(self, db: AsyncSession, review_id: int, user_id: str) -> None: ...

    async def count_likes(self, db: AsyncSession, review_id: int) -> int: ...

    async def create_report(
        self, db: AsyncSession, review_id: int, user_id: str, reason: str | None
    ) -> GeneralReviewReport: ...
