"""EntityLookupRepository — parent-id lookups for cache invalidation."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

_RESTAURANT_FOR_FOOD_SQL = text("SELECT restaurant_id FROM foods WHERE id = :food_id")
_FOOD_FOR_FOOD_REVIEW_SQL = text("SELECT food_id FROM food_reviews WHERE id = :review_id")
_RESTAURANT_FOR_GENERAL_REVIEW_SQL = text(
    "SELECT restaurant_id FROM general_reviews WHERE id = :review_id"
)


class EntityLookupRepository:
    async def restaurant_id_for_food(self, db: AsyncSession, food_id: int) -> int | None:
        row = (await db.execute(_RESTAURANT_FOR_FOOD_SQL, {"food_id": food_id})).fetchone()
        return row.restaurant_id if row else None

    async def food_id_for_food_review(self, db: AsyncSession, review_id: int) -> int | None:
        row = (
            await db.execute(_FOOD_FOR_FOOD_REVIEW_SQL, {"review_id": review_id})
        ).fetchone()
        return row.food_id if row else None

    async def restaurant_id_for_general_review(
        self, db: AsyncSession, review_id: int
    ) -> int | None:
        row = (
            await db.execute(_RESTAURANT_FOR_GENERAL_REVIEW_SQL, {"review_id": review_id})
        ).fetchone()
        return row.restaurant_id if row else None
