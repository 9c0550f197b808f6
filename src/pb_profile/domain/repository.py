# src/pb_profile/domain/repository.py
"""Repository Protocol — dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_profile.domain.models import OwnedFoodReview, Profile


class ProfileRepositoryProtocol(Protocol):
    async def list_profiles(self, db: AsyncSession) -> list[Profile]: ...

    async def get_profile(self, db: AsyncSession, profile_id: int) -> Profile | None: ...

    async def get_profile_by_auth_id(
        self, db: AsyncSession, auth_id: str
    ) -> Profile | None: ...

    async def auth_user_exists(self, db: AsyncSession, auth_id: str) -> bool: ...

    async def auth_email_exists(self, db: AsyncSession, email: str) -> bool: ...

    async def create_profile(self, db: AsyncSession, name: str, auth_id: str) -> Profile: ...

    async def update_name(self, db: AsyncSession, auth_id: str, name: str) -> Profile | None: ...

    async def list_owned_food_reviews(
        self, db: AsyncSession, auth_id: str
    ) -> list[OwnedFoodReview]: ...

    async def delete_food_reviews(self, db: AsyncSession, auth_id: str) -> int: ...

    async def delete_profile(self, db: AsyncSession, auth_id: str) -> bool: ...
