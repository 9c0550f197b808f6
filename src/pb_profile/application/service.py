"""ProfileApplicationService — profiles linked to identity-provider users.

Deleting a profile also deletes the user's food reviews (and the likes on
them); the reviews are listed before the delete so their own cache entries
and those of every touched food and restaurant can be evicted after commit.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.domain.policy import MutationEvent, MutationType
from src.pb_common.errors import (
    InvalidAuthUserError,
    MissingFieldError,
    NameChangeUsedError,
    NotProfileOwnerError,
    ProfileExistsError,
    ProfileNotFoundError,
)
from src.pb_profile.application.schemas import (
    CheckUserResponse,
    CreateProfileRequest,
    DeleteProfileResponse,
    ProfileDetail,
    ProfileOut,
)
from src.pb_profile.domain.repository import ProfileRepositoryProtocol
from src.pb_profile.infrastructure.persistence import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileApplicationService:
    def __init__(self, repo: ProfileRepositoryProtocol | None = None) -> None:
        self._repo: ProfileRepositoryProtocol = repo or ProfileRepository()

    async def list_profiles(self, db: AsyncSession) -> list[ProfileOut]:
        return [ProfileOut.from_domain(p) for p in await self._repo.list_profiles(db)]

    async def get_profile(self, db: AsyncSession, profile_id: int) -> ProfileOut:
        profile = await self._repo.get_profile(db, profile_id)
        if profile is None:
            raise ProfileNotFoundError()
        return ProfileOut.from_domain(profile)

    async def get_profile_by_auth_id(self, db: AsyncSession, auth_id: str) -> ProfileOut:
        profile = await self._repo.get_profile_by_auth_id(db, auth_id)
        if profile is None:
            raise ProfileNotFoundError()
        return ProfileOut.from_domain(profile)

    async def check_user(self, db: AsyncSession, email: str | None) -> CheckUserResponse:
        if not email or not email.strip():
            raise MissingFieldError("Email is required")
        if await self._repo.auth_email_exists(db, email.strip()):
            return CheckUserResponse(exists=True, message="User already exists with this email")
        return CheckUserResponse(exists=False, message="Email is available")

    async def create_profile(
        self,
        db: AsyncSession,
        body: CreateProfileRequest,
        invalidator: CacheInvalidator,
    ) -> ProfileOut:
        name = (body.name or "").strip()
        auth_id = (body.auth_id or "").strip()
        if not name or not auth_id:
            raise MissingFieldError("Name and auth_id are required")

        try:
            if not await self._repo.auth_user_exists(db, auth_id):
                raise InvalidAuthUserError(auth_id)
            # UNIQUE(auth_id) is the final guard; this check gives the common case a clean 409
            if await self._repo.get_profile_by_auth_id(db, auth_id) is not None:
                raise ProfileExistsError()
            profile = await self._repo.create_profile(db, name, auth_id)
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            raise ProfileExistsError() from exc
        except Exception:
            await db.rollback()
            raise

        await invalidator.invalidate(
            db, MutationEvent(kind=MutationType.PROFILE_CREATED, profile_id=profile.id)
        )
        return ProfileOut.from_domain(profile)

    async def update_name(
        self,
        db: AsyncSession,
        auth_id: str,
        name: str | None,
        invalidator: CacheInvalidator,
    ) -> ProfileDetail:
        if not name or not name.strip():
            raise MissingFieldError("Name is required")

        try:
            current = await self._repo.get_profile_by_auth_id(db, auth_id)
            if current is None:
                raise ProfileNotFoundError()
            if current.name_change == 0:
                raise NameChangeUsedError()
            profile = await self._repo.update_name(db, auth_id, name.strip())
            if profile is None:
                raise ProfileNotFoundError()
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await invalidator.invalidate(
            db, MutationEvent(kind=MutationType.PROFILE_UPDATED, profile_id=profile.id)
        )
        return ProfileDetail.from_domain(profile)

    async def delete_profile(
        self,
        db: AsyncSession,
        auth_id: str,
        user_id: str | None,
        invalidator: CacheInvalidator,
    ) -> DeleteProfileResponse:
        if user_id != auth_id:
            raise NotProfileOwnerError()

        try:
            profile = await self._repo.get_profile_by_auth_id(db, auth_id)
            if profile is None:
                raise ProfileNotFoundError()
            affected = await self._repo.list_owned_food_reviews(db, auth_id)
            removed = await self._repo.delete_food_reviews(db, auth_id)
            await self._repo.delete_profile(db, auth_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("Deleted profile %s and %d food reviews", profile.id, removed)
        await invalidator.invalidate(
            db,
            MutationEvent(
                kind=MutationType.PROFILE_DELETED,
                profile_id=profile.id,
                affected_foods=tuple(
                    dict.fromkeys((r.food_id, r.restaurant_id) for r in affected)
                ),
                affected_reviews=tuple(r.review_id for r in affected),
            ),
        )
        return DeleteProfileResponse()
