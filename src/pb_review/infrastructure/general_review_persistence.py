"""GeneralReviewRepository — concrete implementation of GeneralReviewRepositoryProtocol.

Restaurant-scoped reviews, their likes (general_review_likes) and moderation
reports (general_review_reports). Raw text() SQL; writes do not commit.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_review.domain.models import GeneralReview, GeneralReviewReport
from src.pb_stats.domain.models import RestaurantRating

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_LIST_REVIEWS_SQL = text("SELECT * FROM general_reviews ORDER BY created_at DESC")

_GET_REVIEW_SQL = text("SELECT * FROM general_reviews WHERE id = :review_id")

_LIST_BY_RESTAURANT_SQL = text("""
    SELECT * FROM general_reviews
    WHERE restaurant_id = :restaurant_id
    ORDER BY created_at DESC
""")

_LIST_BY_USER_SQL = text("""
    SELECT gr.*,
           r.name AS restaurant_name,
           COALESCE(l.like_count, 0) AS like_count
    FROM general_reviews gr
    JOIN restaurants r ON gr.restaurant_id = r.id
    LEFT JOIN (
        SELECT general_review_id, COUNT(*) AS like_count
        FROM general_review_likes
        GROUP BY general_review_id
    ) l ON gr.id = l.general_review_id
    WHERE gr.user_id = :user_id
    ORDER BY gr.created_at DESC
""")

_RATINGS_FOR_RESTAURANT_SQL = text(
    "SELECT restaurant_id, rating FROM general_reviews WHERE restaurant_id = :restaurant_id"
)

_RESTAURANT_EXISTS_SQL = text("SELECT 1 FROM restaurants WHERE id = :restaurant_id")

_INSERT_REVIEW_SQL = text("""
    INSERT INTO general_reviews (user_id, restaurant_id, rating, text, anonymous)
    VALUES (:user_id, :restaurant_id, :rating, :text, :anonymous)
    RETURNING *
""")

_DELETE_LIKES_FOR_REVIEW_SQL = text(
    "DELETE FROM general_review_likes WHERE general_review_id = :review_id"
)
_DELETE_REPORTS_FOR_REVIEW_SQL = text(
    "DELETE FROM general_review_reports WHERE general_review_id = :review_id"
)
_DELETE_REVIEW_SQL = text("DELETE FROM general_reviews WHERE id = :review_id")

_GET_LIKE_SQL = text("""
    SELECT 1 FROM general_review_likes
    WHERE general_review_id = :review_id AND user_id = :user_id
""")
_INSERT_LIKE_SQL = text("""
    INSERT INTO general_review_likes (general_review_id, user_id)
    VALUES (:review_id, :user_id)
""")
_DELETE_LIKE_SQL = text("""
    DELETE FROM general_review_likes
    WHERE general_review_id = :review_id AND user_id = :user_id
""")
_COUNT_LIKES_SQL = text("""
    SELECT COUNT(*) AS likes FROM general_review_likes
    WHERE general_review_id = :review_id
""")

_INSERT_REPORT_SQL = text("""
    INSERT INTO general_review_reports (general_review_id, reason, user_id)
    VALUES (:review_id, :reason, :user_id)
    RETURNING *
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_review(row: Any, **extras: Any) -> GeneralReview:
    return GeneralReview(
        id=row.id,
        user_id=str(row.user_id),
        restaurant_id=row.restaurant_id,
        rating=row.rating,
        text=row.text,
        anonymous=bool(row.anonymous),
        created_at=row.created_at,
        **extras,
    )


def _row_to_report(row: Any) -> GeneralReviewReport:
    return GeneralReviewReport(
        id=row.id,
        general_review_id=row.general_review_id,
        user_id=str(row.user_id),
        reason=row.reason,
        created_at=row.created_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class GeneralReviewRepository:
    async def list_reviews(self, db: AsyncSession) -> list[GeneralReview]:
        rows = (await db.execute(_LIST_REVIEWS_SQL)).fetchall()
        return [_row_to_review(row) for row in rows]

    async def get_review(self, db: AsyncSession, review_id: int) -> GeneralReview | None:
        row = (await db.execute(_GET_REVIEW_SQL, {"review_id": review_id})).fetchone()
        return _row_to_review(row) if row else None

    async def list_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[GeneralReview]:
        rows = (
            await db.execute(_LIST_BY_RESTAURANT_SQL, {"restaurant_id": restaurant_id})
        ).fetchall()
        return [_row_to_review(row) for row in rows]

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[GeneralReview]:
        rows = (await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id})).fetchall()
        return [
            _row_to_review(
                row,
                like_count=int(row.like_count),
                restaurant_name=row.restaurant_name,
            )
            for row in rows
        ]

    async def list_ratings_for_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[RestaurantRating]:
        rows = (
            await db.execute(_RATINGS_FOR_RESTAURANT_SQL, {"restaurant_id": restaurant_id})
        ).fetchall()
        return [RestaurantRating(restaurant_id=row.restaurant_id, rating=row.rating) for row in rows]

    async def restaurant_exists(self, db: AsyncSession, restaurant_id: int) -> bool:
        params = {"restaurant_id": restaurant_id}
        return (await db.execute(_RESTAURANT_EXISTS_SQL, params)).fetchone() is not None

    async def create_review(
        self,
        db: AsyncSession,
        user_id: str,
        restaurant_id: int,
        rating: int,
        text: str | None,
        anonymous: bool,
    ) -> GeneralReview:
        row = (
            await db.execute(
                _INSERT_REVIEW_SQL,
                {
                    "user_id": user_id,
                    "restaurant_id": restaurant_id,
                    "rating": rating,
                    "text": text,
                    "anonymous": anonymous,
                },
            )
        ).fetchone()
        return _row_to_review(row)

    async def delete_review(self, db: AsyncSession, review_id: int) -> None:
        params = {"review_id": review_id}
        await db.execute(_DELETE_LIKES_FOR_REVIEW_SQL, params)
        await db.execute(_DELETE_REPORTS_FOR_REVIEW_SQL, params)
        await db.execute(_DELETE_REVIEW_SQL, params)

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

    async def create_report(
        self, db: AsyncSession, review_id: int, user_id: str, reason: str | None
    ) -> GeneralReviewReport:
        row = (
            await db.execute(
                _INSERT_REPORT_SQL,
                {"review_id": review_id, "reason": reason, "user_id": user_id},
            )
        ).fetchone()
        return _row_to_report(row)
