"""RestaurantApplicationService — thin composition layer.

All methods are read-only; no commit/rollback needed.
Rating aggregates are computed by pb_stats from raw rating rows.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_common.errors import RestaurantNotFoundError
from src.pb_common.response import Pagination, data_response
from src.pb_restaurant.application.schemas import (
    RestaurantOut,
    RestaurantReviewOut,
    RestaurantSearchItem,
    RestaurantStatsOut,
)
from src.pb_restaurant.domain.repository import RestaurantRepositoryProtocol
from src.pb_restaurant.infrastructure.persistence import RestaurantRepository
from src.pb_stats.domain.stats import RestaurantStats, group_ratings, restaurant_stats

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class RestaurantApplicationService:
    def __init__(self, repo: RestaurantRepositoryProtocol | None = None) -> None:
        self._repo: RestaurantRepositoryProtocol = repo or RestaurantRepository()

    async def list_restaurants(
        self, db: AsyncSession, page: int, limit: int | None
    ) -> dict[str, Any]:
        # Oversized pages are clamped, not rejected
        limit = min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
        page = max(page, 1)
        total = await self._repo.count_restaurants(db)
        restaurants = await self._repo.list_restaurants(db, limit, (page - 1) * limit)
        return data_response(
            [RestaurantOut.from_domain(r).model_dump() for r in restaurants],
            Pagination.build(page, limit, total),
        )

    async def search_restaurants(
        self, db: AsyncSession, q: str | None, page: int, limit: int | None
    ) -> dict[str, Any] | list[dict[str, Any]]:
        """Blank search falls back to the paginated listing."""
        if not q or not q.strip():
            return await self.list_restaurants(db, page, limit)

        restaurants = await self._repo.search_restaurants(db, q.strip())
        stats = await self._compute_stats(db, [r.id for r in restaurants])
        return [
            RestaurantSearchItem.from_domain_with_stats(r, stats[r.id]).model_dump()
            for r in restaurants
        ]

    async def get_restaurant(self, db: AsyncSession, restaurant_id: int) -> RestaurantOut:
        restaurant = await self._repo.get_restaurant_by_id(db, restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        return RestaurantOut.from_domain(restaurant)

    async def get_restaurant_stats(
        self, db: AsyncSession, restaurant_id: int
    ) -> RestaurantStatsOut:
        restaurant = await self._repo.get_restaurant_by_id(db, restaurant_id)
        if restaurant is None:
            raise RestaurantNotFoundError(restaurant_id)
        stats = await self._compute_stats(db, [restaurant_id])
        return RestaurantStatsOut.from_stats(stats[restaurant_id])

    async def list_restaurant_reviews(self, db: AsyncSession) -> list[RestaurantReviewOut]:
        reviews = await self._repo.list_restaurant_reviews(db)
        return [RestaurantReviewOut.from_domain(r) for r in reviews]

    async def _compute_stats(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> dict[int, RestaurantStats]:
        prices = await self._repo.list_food_prices(db, restaurant_ids)
        food_ratings = group_ratings(
            await self._repo.list_food_ratings(db, restaurant_ids), "food_id"
        )
        general_ratings = group_ratings(
            await self._repo.list_general_ratings(db, restaurant_ids), "restaurant_id"
        )

        prices_by_restaurant: dict[int, dict[int, Any]] = {rid: {} for rid in restaurant_ids}
        for p in prices:
            prices_by_restaurant.setdefault(p.restaurant_id, {})[p.food_id] = p.price

        return {
            rid: restaurant_stats(
                food_ratings,
                prices_by_restaurant[rid],
                general_ratings.get(rid, []),
            )
            for rid in restaurant_ids
        }
