"""RestaurantRepository — concrete implementation of RestaurantRepositoryProtocol.

All queries use raw text() SQL (no ORM). Rating aggregates are NOT computed
in SQL: the repository returns raw rating rows and the service runs them
through pb_stats.
"""

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_restaurant.domain.models import Restaurant, RestaurantReview
from src.pb_stats.domain.models import FoodPrice, FoodRating, RestaurantRating

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COUNT_RESTAURANTS_SQL = text("SELECT COUNT(*) AS total FROM restaurants")

_LIST_RESTAURANTS_SQL = text("""
    SELECT r.id, r.name, r.description, r.location, r.hours, r.image_url, r.created_at,
           COUNT(DISTINCT f.id) AS menu_item_count
    FROM restaurants r
    LEFT JOIN foods f ON f.restaurant_id = r.id
    GROUP BY r.id
    ORDER BY r.id ASC
    LIMIT :limit OFFSET :offset
""")

_GET_RESTAURANT_SQL = text("""
    SELECT r.id, r.name, r.description, r.location, r.hours, r.image_url, r.created_at,
           COUNT(DISTINCT f.id) AS menu_item_count
    FROM restaurants r
    LEFT JOIN foods f ON f.restaurant_id = r.id
    WHERE r.id = :restaurant_id
    GROUP BY r.id
""")

_SEARCH_RESTAURANTS_SQL = text("""
    SELECT r.id, r.name, r.description, r.location, r.hours, r.image_url, r.created_at,
           COUNT(DISTINCT f.id) AS menu_item_count
    FROM restaurants r
    LEFT JOIN foods f ON f.restaurant_id = r.id
    WHERE r.name ILIKE :term OR r.description ILIKE :term
    GROUP BY r.id
    ORDER BY r.id ASC
""")

_FOOD_PRICES_SQL = text("""
    SELECT id AS food_id, restaurant_id, price
    FROM foods
    WHERE restaurant_id IN :restaurant_ids
""").bindparams(bindparam("restaurant_ids", expanding=True))

_FOOD_RATINGS_SQL = text("""
    SELECT fr.food_id, fr.rating
    FROM food_reviews fr
    JOIN foods f ON fr.food_id = f.id
    WHERE f.restaurant_id IN :restaurant_ids
""").bindparams(bindparam("restaurant_ids", expanding=True))

_GENERAL_RATINGS_SQL = text("""
    SELECT restaurant_id, rating
    FROM general_reviews
    WHERE restaurant_id IN :restaurant_ids
""").bindparams(bindparam("restaurant_ids", expanding=True))

_LIST_RESTAURANT_REVIEWS_SQL = text("""
    SELECT id, restaurant_id, user_id, rating, text, created_at
    FROM restaurant_reviews
    ORDER BY id ASC
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_restaurant(row: object) -> Restaurant:
    return Restaurant(
        id=row.id,  # type: ignore[attr-defined]
        name=row.name,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        location=row.location,  # type: ignore[attr-defined]
        hours=row.hours,  # type: ignore[attr-defined]
        image_url=row.image_url,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        menu_item_count=int(row.menu_item_count),  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class RestaurantRepository:
    """Concrete repository — all operations are read-only SQL queries."""

    async def count_restaurants(self, db: AsyncSession) -> int:
        row = (await db.execute(_COUNT_RESTAURANTS_SQL)).fetchone()
        return int(row.total) if row else 0

    async def list_restaurants(
        self, db: AsyncSession, limit: int, offset: int
    ) -> list[Restaurant]:
        result = await db.execute(_LIST_RESTAURANTS_SQL, {"limit": limit, "offset": offset})
        return [_row_to_restaurant(row) for row in result.fetchall()]

    async def get_restaurant_by_id(
        self, db: AsyncSession, restaurant_id: int
    ) -> Restaurant | None:
        result = await db.execute(_GET_RESTAURANT_SQL, {"restaurant_id": restaurant_id})
        row = result.fetchone()
        return _row_to_restaurant(row) if row else None

    async def search_restaurants(self, db: AsyncSession, term: str) -> list[Restaurant]:
        result = await db.execute(_SEARCH_RESTAURANTS_SQL, {"term": f"%{term}%"})
        return [_row_to_restaurant(row) for row in result.fetchall()]

    async def list_food_prices(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> list[FoodPrice]:
        if not restaurant_ids:
            return []
        result = await db.execute(_FOOD_PRICES_SQL, {"restaurant_ids": restaurant_ids})
        return [
            FoodPrice(food_id=row.food_id, restaurant_id=row.restaurant_id, price=row.price)
            for row in result.fetchall()
        ]

    async def list_food_ratings(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> list[FoodRating]:
        if not restaurant_ids:
            return []
        result = await db.execute(_FOOD_RATINGS_SQL, {"restaurant_ids": restaurant_ids})
        return [FoodRating(food_id=row.food_id, rating=row.rating) for row in result.fetchall()]

    async def list_general_ratings(
        self, db: AsyncSession, restaurant_ids: list[int]
    ) -> list[RestaurantRating]:
        if not restaurant_ids:
            return []
        result = await db.execute(_GENERAL_RATINGS_SQL, {"restaurant_ids": restaurant_ids})
        return [
            RestaurantRating(restaurant_id=row.restaurant_id, rating=row.rating)
            for row in result.fetchall()
        ]

    async def list_restaurant_reviews(self, db: AsyncSession) -> list[RestaurantReview]:
        result = await db.execute(_LIST_RESTAURANT_REVIEWS_SQL)
        return [
            RestaurantReview(
                id=row.id,
                restaurant_id=row.restaurant_id,
                user_id=str(row.user_id) if row.user_id is not None else None,
                rating=row.rating,
                text=row.text,
                created_at=row.created_at,
            )
            for row in result.fetchall()
        ]
