# tests/unit/test_profile_service.py
"""Unit tests for ProfileApplicationService."""
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.domain.keys import CacheKey, Resource
from src.pb_cache.domain.policy import MutationType
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.errors import (
    InvalidAuthUserError,
    MissingFieldError,
    NameChangeUsedError,
    NotProfileOwnerError,
    ProfileExistsError,
    ProfileNotFoundError,
)
from src.pb_profile.application.schemas import CreateProfileRequest
from src.pb_profile.application.service import ProfileApplicationService
from src.pb_profile.domain.models import OwnedFoodReview, Profile

AUTH_ID = "3e7a1f20-0000-4000-8000-000000000042"


def _make_profile(**kwargs) -> Profile:
    defaults = dict(
        id=12, name="Mustang Eater", auth_id=AUTH_ID, name_change=1,
        created_at=datetime.now(UTC),
    )
    defaults.update(kwargs)
    return Profile(**defaults)


@pytest.fixture
def db():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def mock_repo():
    return MagicMock()


@pytest.fixture
def invalidator():
    inv = MagicMock()
    inv.invalidate = AsyncMock()
    return inv


class TestCheckUser:
    @pytest.mark.asyncio
    async def test_email_required(self, db, mock_repo):
        svc = ProfileApplicationService(repo=mock_repo)
        with pytest.raises(MissingFieldError) as exc_info:
            await svc.check_user(db, None)
        assert exc_info.value.http_status == 400

    @pytest.mark.asyncio
    async def test_existing_email(self, db, mock_repo):
        mock_repo.auth_email_exists = AsyncMock(return_value=True)
        svc = ProfileApplicationService(repo=mock_repo)

        resp = await svc.check_user(db, "eater@calpoly.edu")

        assert resp.exists is True
        assert resp.message == "User already exists with this email"

    @pytest.mark.asyncio
    async def test_available_email(self, db, mock_repo):
        mock_repo.auth_email_exists = AsyncMock(return_value=False)
        svc = ProfileApplicationService(repo=mock_repo)

        resp = await svc.check_user(db, "new@calpoly.edu")

        assert resp.exists is False
        assert resp.message == "Email is available"


class TestCreateProfile:
    @pytest.mark.asyncio
    async def test_blank_fields(self, db, mock_repo, invalidator):
        svc = ProfileApplicationService(repo=mock_repo)
        with pytest.raises(MissingFieldError):
            await svc.create_profile(db, CreateProfileRequest(name=" ", auth_id=AUTH_ID), invalidator)

    @pytest.mark.asyncio
    async def test_unknown_auth_user(self, db, mock_repo, invalidator):
        mock_repo.auth_user_exists = AsyncMock(return_value=False)
        svc = ProfileApplicationService(repo=mock_repo)

        with pytest.raises(InvalidAuthUserError) as exc_info:
            await svc.create_profile(
                db, CreateProfileRequest(name="Eater", auth_id=AUTH_ID), invalidator
            )
        assert exc_info.value.http_status == 400

    @pytest.mark.asyncio
    async def test_existing_profile_is_409(self, db, mock_repo, invalidator):
        mock_repo.auth_user_exists = AsyncMock(return_value=True)
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=_make_profile())
        svc = ProfileApplicationService(repo=mock_repo)

        with pytest.raises(ProfileExistsError) as exc_info:
            await svc.create_profile(
                db, CreateProfileRequest(name="Eater", auth_id=AUTH_ID), invalidator
            )
        assert exc_info.value.http_status == 409

    @pytest.mark.asyncio
    async def test_unique_violation_is_409(self, db, mock_repo, invalidator):
        mock_repo.auth_user_exists = AsyncMock(return_value=True)
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=None)
        mock_repo.create_profile = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("profiles_auth_id_key"))
        )
        svc = ProfileApplicationService(repo=mock_repo)

        with pytest.raises(ProfileExistsError):
            await svc.create_profile(
                db, CreateProfileRequest(name="Eater", auth_id=AUTH_ID), invalidator
            )
        db.rollback.assert_awaited_once()
        invalidator.invalidate.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_invalidates_listing(self, db, mock_repo, invalidator):
        mock_repo.auth_user_exists = AsyncMock(return_value=True)
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=None)
        mock_repo.create_profile = AsyncMock(return_value=_make_profile())
        svc = ProfileApplicationService(repo=mock_repo)

        profile = await svc.create_profile(
            db, CreateProfileRequest(name=" Mustang Eater ", auth_id=AUTH_ID), invalidator
        )

        assert profile.id == 12
        mock_repo.create_profile.assert_awaited_once_with(db, "Mustang Eater", AUTH_ID)
        event = invalidator.invalidate.call_args.args[1]
        assert event.kind == MutationType.PROFILE_CREATED


class TestUpdateName:
    @pytest.mark.asyncio
    async def test_second_rename_is_403(self, db, mock_repo, invalidator):
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=_make_profile(name_change=0))
        mock_repo.update_name = AsyncMock()
        svc = ProfileApplicationService(repo=mock_repo)

        with pytest.raises(NameChangeUsedError) as exc_info:
            await svc.update_name(db, AUTH_ID, "New Name", invalidator)

        assert exc_info.value.http_status == 403
        mock_repo.update_name.assert_not_called()

    @pytest.mark.asyncio
    async def test_first_rename(self, db, mock_repo, invalidator):
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=_make_profile())
        mock_repo.update_name = AsyncMock(
            return_value=_make_profile(name="New Name", name_change=0)
        )
        svc = ProfileApplicationService(repo=mock_repo)

        profile = await svc.update_name(db, AUTH_ID, "New Name", invalidator)

        assert profile.name == "New Name"
        assert profile.name_change == 0
        event = invalidator.invalidate.call_args.args[1]
        assert (event.kind, event.profile_id) == (MutationType.PROFILE_UPDATED, 12)

    @pytest.mark.asyncio
    async def test_missing_profile(self, db, mock_repo, invalidator):
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=None)
        svc = ProfileApplicationService(repo=mock_repo)

        with pytest.raises(ProfileNotFoundError):
            await svc.update_name(db, AUTH_ID, "New Name", invalidator)

    @pytest.mark.asyncio
    async def test_blank_name(self, db, mock_repo, invalidator):
        svc = ProfileApplicationService(repo=mock_repo)
        with pytest.raises(MissingFieldError):
            await svc.update_name(db, AUTH_ID, "   ", invalidator)


class TestDeleteProfile:
    @pytest.mark.asyncio
    async def test_only_owner(self, db, mock_repo, invalidator):
        svc = ProfileApplicationService(repo=mock_repo)
        with pytest.raises(NotProfileOwnerError):
            await svc.delete_profile(db, AUTH_ID, "someone-else", invalidator)

    @pytest.mark.asyncio
    async def test_cascades_reviews_and_fans_out(self, db, mock_repo, invalidator):
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=_make_profile())
        mock_repo.list_owned_food_reviews = AsyncMock(
            return_value=[
                OwnedFoodReview(77, 5, 9),
                OwnedFoodReview(78, 5, 9),
                OwnedFoodReview(79, 6, 9),
            ]
        )
        mock_repo.delete_food_reviews = AsyncMock(return_value=3)
        mock_repo.delete_profile = AsyncMock(return_value=True)
        svc = ProfileApplicationService(repo=mock_repo)

        await svc.delete_profile(db, AUTH_ID, AUTH_ID, invalidator)

        mock_repo.delete_food_reviews.assert_awaited_once_with(db, AUTH_ID)
        mock_repo.delete_profile.assert_awaited_once_with(db, AUTH_ID)
        event = invalidator.invalidate.call_args.args[1]
        assert event.kind == MutationType.PROFILE_DELETED
        assert event.profile_id == 12
        assert event.affected_foods == ((5, 9), (6, 9))
        assert event.affected_reviews == (77, 78, 79)

    @pytest.mark.asyncio
    async def test_absent_profile(self, db, mock_repo, invalidator):
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=None)
        mock_repo.delete_food_reviews = AsyncMock()
        svc = ProfileApplicationService(repo=mock_repo)

        with pytest.raises(ProfileNotFoundError):
            await svc.delete_profile(db, AUTH_ID, AUTH_ID, invalidator)
        mock_repo.delete_food_reviews.assert_not_called()

    @pytest.mark.asyncio
    async def test_cascaded_review_no_longer_cached(self, db, mock_repo):
        cache = ResponseCache()
        cache.set(CacheKey.of(Resource.FOOD_REVIEW, 77), {"id": 77, "food_id": 5})
        cache.set(CacheKey.of(Resource.FOOD_REVIEW_STATS, 5), {"review_count": 1})
        lookup = MagicMock()
        mock_repo.get_profile_by_auth_id = AsyncMock(return_value=_make_profile())
        mock_repo.list_owned_food_reviews = AsyncMock(return_value=[OwnedFoodReview(77, 5, 9)])
        mock_repo.delete_food_reviews = AsyncMock(return_value=1)
        mock_repo.delete_profile = AsyncMock(return_value=True)
        svc = ProfileApplicationService(repo=mock_repo)

        await svc.delete_profile(db, AUTH_ID, AUTH_ID, CacheInvalidator(cache, lookup=lookup))

        assert cache.get(CacheKey.of(Resource.FOOD_REVIEW, 77)) is None
        assert cache.get(CacheKey.of(Resource.FOOD_REVIEW_STATS, 5)) is None
