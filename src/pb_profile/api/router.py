"""pb_profile REST endpoints (/profiles).

Profiles by id (and the listing) are cached with the default TTL; lookups by
auth id serve the signed-in user's own view and are never cached.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.api.dependencies import get_cache_invalidator, get_response_cache
from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.application.read_through import read_through
from src.pb_cache.domain.keys import CacheKey, Resource
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.database import get_db_session
from src.pb_profile.application.schemas import (
    CheckUserResponse,
    CreateProfileRequest,
    DeleteProfileRequest,
    DeleteProfileResponse,
    ProfileDetail,
    ProfileOut,
    UpdateProfileRequest,
)
from src.pb_profile.application.service import ProfileApplicationService

router = APIRouter(prefix="/profiles", tags=["profiles"])

_service = ProfileApplicationService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Invalidator = Annotated[CacheInvalidator, Depends(get_cache_invalidator)]


@router.get("")
async def list_profiles(
    db: DbSession,
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_profiles(db))

    return await read_through(cache, CacheKey.of(Resource.PROFILES), load)


@router.get("/check-user", response_model=CheckUserResponse)
async def check_user(
    db: DbSession,
    email: str | None = Query(None),
) -> CheckUserResponse:
    return await _service.check_user(db, email)


@router.get("/auth/{auth_id}", response_model=ProfileOut)
async def get_profile_by_auth_id(auth_id: str, db: DbSession) -> ProfileOut:
    return await _service.get_profile_by_auth_id(db, auth_id)


@router.get("/{profile_id}")
async def get_profile(
    profile_id: int,
    db: DbSession,
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_profile(db, profile_id))

    return await read_through(cache, CacheKey.of(Resource.PROFILE, profile_id), load)


@router.post("", response_model=ProfileOut, status_code=201)
async def create_profile(
    body: CreateProfileRequest, db: DbSession, invalidator: Invalidator
) -> ProfileOut:
    return await _service.create_profile(db, body, invalidator)


@router.put("/auth/{auth_id}", response_model=ProfileDetail)
async def update_profile(
    auth_id: str,
    db: DbSession,
    invalidator: Invalidator,
    body: Annotated[UpdateProfileRequest, Body()] = UpdateProfileRequest(),
) -> ProfileDetail:
    return await _service.update_name(db, auth_id, body.name, invalidator)


@router.delete("/auth/{auth_id}", response_model=DeleteProfileResponse)
async def delete_profile(
    auth_id: str,
    db: DbSession,
    invalidator: Invalidator,
    body: Annotated[DeleteProfileRequest, Body()] = DeleteProfileRequest(),
) -> DeleteProfileResponse:
    return await _service.delete_profile(db, auth_id, body.user_id, invalidator)
