"""FoodReviewRepository — concrete implementation of FoodReviewRepositoryProtocol.

All queries use raw text() SQL (no ORM). Writes do not commit; the
application service owns the transaction.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_review.domain.models import FoodReview, RestaurantSummary
from src.pb_stats.domain.models import FoodRating, RestaurantRating

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_LIKE_COUNTS = """
    LEFT JOIN (
        SELECT food_review_id, COUNT(*) AS like_count
        FROM likes
        GROUP BY food_review_id
    ) l ON fr.id = l.food_review_id
"""

_LIST_REVIEWS_SQL = text(f"""
    SELECT fr.*, COALESCE(l.like_count, 0) AS like_count
    FROM food_reviews fr
    {_LIKE_COUNTS}
    ORDER BY fr.id ASC
""")

_GET_REVIEW_SQL = text("SELECT * FROM food_reviews WHERE id = :review_id")

_LIST_BY_FOOD_SQL = text(f"""
    SELECT fr.*, COALESCE(l.like_count, 0) AS like_count
    FROM food_reviews fr
    {_LIKE_COUNTS}
    WHERE fr.food_id = :food_id
    ORDER BY fr.id ASC
""")

_LIST_BY_RESTAURANT_SQL = text("""
    SELECT fr.*, f.name AS food_name
    FROM food_reviews fr
    JOIN foods f ON fr.food_id = f.id
    WHERE f.restaurant_id = :restaurant_id
    ORDER BY fr.id ASC
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT fr.*,
           f.name AS food_name,
           f.food_type AS food_type,
           r.name AS restaurant_name,
           r.id AS restaurant_id,
           COALESCE(l.like_count, 0) AS like_count
    FROM food_reviews fr
    JOIN foods f ON fr.food_id = f.id
    JOIN restaurants r ON f.restaurant_id = r.id
    {_LIKE_COUNTS}
    WHERE fr.user_id = :user_id
    ORDER BY fr.created_at DESC
""")

_RATINGS_FOR_FOOD_SQL = text(
    "SELECT food_id, rating FROM food_reviews WHERE food_id = :food_id"
)

_FOOD_IDS_FOR_RESTAURANT_SQL = text(
    "SELECT id FROM foods WHERE restaurant_id = :restaurant_id ORDER BY id"
)

_RATINGS_FOR_RESTAURANT_SQL = text("""
    SELECT fr.food_id, fr.rating
    FROM food_reviews fr
    JOIN foods f ON fr.food_id = f.id
    WHERE f.restaurant_id = :restaurant_id
""")

_LIST_RESTAURANTS_SQL = text("SELECT id, name FROM restaurants ORDER BY id")

_RATINGS_BY_RESTAURANT_SQL = text("""
    SELECT f.restaurant_id, fr.rating
    FROM food_reviews fr
    JOIN foods f ON fr.food_id = f.id
""")

_FOOD_EXISTS_SQL = text("SELECT 1 FROM foods WHERE id = :food_id")

_INSERT_REVIEW_SQL = text("""
    INSERT INTO food_reviews (user_id, food_id, rating, text, anonymous)
    VALUES (:user_id, :food_id, :rating, :text, :anonymous)
    RETURNING *
""")

_DELETE_LIKES_FOR_REVIEW_SQL = text("DELETE FROM likes WHERE food_review_id = :review_id")
_DELETE_REVIEW_SQL = text("DELETE FROM food_reviews WHERE id = :review_id")

_GET_LIKE_SQL = text(
    "SELECT 1 FROM likes WHERE food_review_id = :review_id AND user_id = :user_id"
)
_INSERT_LIKE_SQL = text(
    "INSERT INTO likes (food_review_id, user_id) VALUES (:review_id, :user_id)"
)
_DELETE_LIKE_SQL = text(
    "DELETE FROM likes WHERE food_review_id = :review_id AND user_id = :user_id"
)
_COUNT_LIKES_SQL = text(
    "SELECT COUNT(*) AS likes FROM likes WHERE food_review_id = :review_id"
)

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_review(row: Any, **extras: Any) -> FoodReview:
    return FoodReview(
        id=row.id,
        user_id=str(row.user_id),
        food_id=row.food_id,
        rating=row.rating,
        text=row.text,
        anonymous=bool(row.anonymous),
        created_at=row.created_at,
        **extras,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class FoodReviewRepository:
    async def list_reviews(self, db: AsyncSession) -> list[FoodReview]:
        rows = (await db.execute(_LIST_REVIEWS_SQL)).fetchall()
        return [_row_to_review(row, like_count=int(row.like_count)) for row in rows]

    async def get_review(self, db: AsyncSession, review_id: int) -> FoodReview | None:
        row = (await db.execute(_GET_REVIEW_SQL, {"review_id": review_id})).fetchone()
        return _row_to_review(row) if row else None

    async def list_by_food(self, db: AsyncSession, food_id: int) -> list[FoodReview]:
        rows = (await db.execute(_LIST_BY_FOOD_SQL, {"food_id": food_id})).fetchall()
        return [_row_to_review(row, like_count=int(row.like_count)) for row in rows]

    async def list_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[FoodReview]:
        rows = (
            await db.execute(_LIST_BY_RESTAURANT_SQL, {"restaurant_id": restaurant_id})
        ).fetchall()
        return [_row_to_review(row, food_name=row.food_name) for row in rows]

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[FoodReview]:
        rows = (await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})).fetchall()
        return [
            _row_to_review(
                row,
                like_count=int(row.like_count),
                food_name=row.food_name,
                food_type=row.food_type,
                restaurant_id=row.restaurant_id,
                restaurant_name=row.restaurant_name,
            )
            for row in rows
        ]

    async def list_ratings_for_food(self, db: AsyncSession, food_id: int) -> list[FoodRating]:
        rows = (await db.execute(_RATINGS_FOR_FOOD_SQL, {"food_id": food_id})).fetchall()
        return [FoodRating(food_id=row.food_id, rating=row.rating) for row in rows]

    async def list_food_ids_for_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[int]:
        rows = (
            await db.execute(_FOOD_IDS_FOR_RESTAURANT_SQL, {"restaurant_id": restaurant_id})
        ).fetchall()
        return [row.id for row in rows]

    async def list_ratings_for_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[FoodRating]:
        rows = (
            await db.execute(_RATINGS_FOR_RESTAURANT_SQL, {"restaurant_id": restaurant_id})
        ).fetchall()
        return [FoodRating(food_id=row.food_id, rating=row.rating) for row in rows]

    async def list_restaurants(self, db: AsyncSession) -> list[RestaurantSummary]:
        rows = (await db.execute(_LIST_RESTAURANTS_SQL)).fetchall()
        return [RestaurantSummary(id=row.id, name=row.name) for row in rows]

    async def list_ratings_by_restaurant(self, db: AsyncSession) -> list[RestaurantRating]:
        rows = (await db.execute(_RATINGS_BY_RESTAURANT_SQL)).fetchall()
        return [RestaurantRating(restaurant_id=row.restaurant_id, rating=row.rating) for row in rows]

    async def food_exists(self, db: AsyncSession, food_id: int) -> bool:
        row = (await db.execute(_FOOD_EXISTS_SQL, {"food_id": food_id})).fetchone()
        return row is not None

    async def create_review(
        self,
        db: AsyncSession,
        user_id: str,
        food_id: int,
        rating: int,
        text: str | None,
        anonymous: bool,
    ) -> FoodReview:
        row = (
            await db.execute(
                _INSERT_REVIEW_SQL,
                {
                    "user_id": user_id,
                    "food_id": food_id,
                    "rating": rating,
                    "text": text,
                    "anonymous": anonymous,
                },
            )
        ).fetchone()
        return _row_to_review(row)

    async def delete_review(self, db: AsyncSession, review_id: int) -> None:
        # Likes reference the review; remove them first
        await db.execute(_DELETE_LIKES_FOR_REVIEW_SQL, {"review_id": review_id})
        await db.execute(_DELETE_REVIEW_SQL, {"review_id": review_id})

    async def has_like(self, db: AsyncSession, review_id: int, user_id: str) -> bool:
        params = {"review_id": review_id, "user_id": user_id}
        return (await db.execute(_GET_LIKE_SQL, params)).fetchone() is not None

    async def add_like(self, db: AsyncSession, review_id: int, user_id: str) -> None:
        await db.execute(_INSERT_LIKE_SQL, {"review_id": review_id, "user_id": user_id})

    async def remove_like(self, db: AsyncSession, review_id: int, user_id: str) -> None:
        await db.execute(_DELETE_LIKE_SQL, {"review_id": review_id, "user_id": user_id})

    async def count_likes(self, db: AsyncSession, review_id: int) -> int:
        row = (await db.execute(_COUNT_LIKES_SQL, {"review_id": review_id})).fetchone()
        return int(row.likes) if row else 0
