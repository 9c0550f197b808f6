"""FoodRepository — concrete implementation of FoodRepositoryProtocol.

All queries use raw text() SQL (no ORM).
"""

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_food.domain.models import Food
from src.pb_stats.domain.models import FoodRating

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_FOOD_COLUMNS = "id, restaurant_id, name, description, price, food_type, image_url, created_at"

_LIST_FOODS_SQL = text(f"SELECT {_FOOD_COLUMNS} FROM foods ORDER BY id ASC")

_LIST_FOODS_BY_RESTAURANT_SQL = text(f"""
    SELECT {_FOOD_COLUMNS}
    FROM foods
    WHERE restaurant_id = :restaurant_id
    ORDER BY id ASC
""")

_GET_FOOD_SQL = text(f"SELECT {_FOOD_COLUMNS} FROM foods WHERE id = :food_id")

_ALL_RATINGS_SQL = text("SELECT food_id, rating FROM food_reviews")

_RATINGS_FOR_FOODS_SQL = text("""
    SELECT food_id, rating
    FROM food_reviews
    WHERE food_id IN :food_ids
""").bindparams(bindparam("food_ids", expanding=True))

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_food(row: object) -> Food:
    return Food(
        id=row.id,  # type: ignore[attr-defined]
        restaurant_id=row.restaurant_id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        price=row.price,  # type: ignore[attr-defined]
        food_type=row.food_type,  # type: ignore[attr-defined]
        image_url=row.image_url,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class FoodRepository:
    async def list_foods(self, db: AsyncSession) -> list[Food]:
        result = await db.execute(_LIST_FOODS_SQL)
        return [_row_to_food(row) for row in result.fetchall()]

    async def list_foods_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[Food]:
        result = await db.execute(
            _LIST_FOODS_BY_RESTAURANT_SQL, {"restaurant_id": restaurant_id}
        )
        return [_row_to_food(row) for row in result.fetchall()]

    async def get_food_by_id(self, db: AsyncSession, food_id: int) -> Food | None:
        row = (await db.execute(_GET_FOOD_SQL, {"food_id": food_id})).fetchone()
        return _row_to_food(row) if row else None

    async def list_ratings(
        self, db: AsyncSession, food_ids: list[int] | None = None
    ) -> list[FoodRating]:
        """Ratings for the given foods; None means every food."""
        if food_ids is None:
            result = await db.execute(_ALL_RATINGS_SQL)
        elif not food_ids:
            return []
        else:
            result = await db.execute(_RATINGS_FOR_FOODS_SQL, {"food_ids": food_ids})
        return [FoodRating(food_id=row.food_id, rating=row.rating) for row in result.fetchall()]
