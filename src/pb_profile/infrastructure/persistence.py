"""ProfileRepository — concrete implementation of ProfileRepositoryProtocol.

auth.users belongs to the identity provider; this service only reads it
to validate auth ids and emails.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_profile.domain.models import OwnedFoodReview, Profile

_LIST_PROFILES_SQL = text("SELECT * FROM profiles ORDER BY id")
_GET_PROFILE_SQL = text("SELECT * FROM profiles WHERE id = :profile_id")
_GET_BY_AUTH_ID_SQL = text("SELECT * FROM profiles WHERE auth_id = :auth_id")

_AUTH_USER_EXISTS_SQL = text("SELECT 1 FROM auth.users WHERE id = :auth_id")
_AUTH_EMAIL_EXISTS_SQL = text("SELECT 1 FROM auth.users WHERE email = :email")

_INSERT_PROFILE_SQL = text("""
    INSERT INTO profiles (name, auth_id)
    VALUES (:name, :auth_id)
    RETURNING *
""")

_UPDATE_NAME_SQL = text("""
    UPDATE profiles
    SET name = :name, name_change = 0
    WHERE auth_id = :auth_id
    RETURNING *
""")

_OWNED_FOOD_REVIEWS_SQL = text("""
    SELECT fr.id AS review_id, fr.food_id, f.restaurant_id
    FROM food_reviews fr
    JOIN foods f ON fr.food_id = f.id
    WHERE fr.user_id = :auth_id
""")

_DELETE_REVIEW_LIKES_SQL = text("""
    DELETE FROM likes
    WHERE food_review_id IN (SELECT id FROM food_reviews WHERE user_id = :auth_id)
""")
_DELETE_FOOD_REVIEWS_SQL = text("DELETE FROM food_reviews WHERE user_id = :auth_id")
_DELETE_PROFILE_SQL = text("DELETE FROM profiles WHERE auth_id = :auth_id RETURNING id")


def _row_to_profile(row: Any) -> Profile:
    return Profile(
        id=row.id,
        name=row.name,
        auth_id=str(row.auth_id),
        name_change=row.name_change,
        created_at=row.created_at,
    )


class ProfileRepository:
    async def list_profiles(self, db: AsyncSession) -> list[Profile]:
        rows = (await db.execute(_LIST_PROFILES_SQL)).fetchall()
        return [_row_to_profile(row) for row in rows]

    async def get_profile(self, db: AsyncSession, profile_id: int) -> Profile | None:
        row = (await db.execute(_GET_PROFILE_SQL, {"profile_id": profile_id})).fetchone()
        return _row_to_profile(row) if row else None

    async def get_profile_by_auth_id(self, db: AsyncSession, auth_id: str) -> Profile | None:
        row = (await db.execute(_GET_BY_AUTH_ID_SQL, {"auth_id": auth_id})).fetchone()
        return _row_to_profile(row) if row else None

    async def auth_user_exists(self, db: AsyncSession, auth_id: str) -> bool:
        row = (await db.execute(_AUTH_USER_EXISTS_SQL, {"auth_id": auth_id})).fetchone()
        return row is not None

    async def auth_email_exists(self, db: AsyncSession, email: str) -> bool:
        row = (await db.execute(_AUTH_EMAIL_EXISTS_SQL, {"email": email})).fetchone()
        return row is not None

    async def create_profile(self, db: AsyncSession, name: str, auth_id: str) -> Profile:
        row = (
            await db.execute(_INSERT_PROFILE_SQL, {"name": name, "auth_id": auth_id})
        ).fetchone()
        return _row_to_profile(row)

    async def update_name(self, db: AsyncSession, auth_id: str, name: str) -> Profile | None:
        row = (
            await db.execute(_UPDATE_NAME_SQL, {"name": name, "auth_id": auth_id})
        ).fetchone()
        return _row_to_profile(row) if row else None

    async def list_owned_food_reviews(
        self, db: AsyncSession, auth_id: str
    ) -> list[OwnedFoodReview]:
        rows = (await db.execute(_OWNED_FOOD_REVIEWS_SQL, {"auth_id": auth_id})).fetchall()
        return [
            OwnedFoodReview(
                review_id=row.review_id, food_id=row.food_id, restaurant_id=row.restaurant_id
            )
            for row in rows
        ]

    async def delete_food_reviews(self, db: AsyncSession, auth_id: str) -> int:
        """Delete the user's food reviews and the likes on them. Returns reviews removed."""
        await db.execute(_DELETE_REVIEW_LIKES_SQL, {"auth_id": auth_id})
        result = await db.execute(_DELETE_FOOD_REVIEWS_SQL, {"auth_id": auth_id})
        return result.rowcount or 0

    async def delete_profile(self, db: AsyncSession, auth_id: str) -> bool:
        row = (await db.execute(_DELETE_PROFILE_SQL, {"auth_id": auth_id})).fetchone()
        return row is not None
