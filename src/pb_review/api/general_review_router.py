"""pb_review general review endpoints (/general-reviews)."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.api.dependencies import get_cache_invalidator, get_response_cache
from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.application.read_through import read_through
from src.pb_cache.domain.keys import CacheKey, Resource
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.database import get_db_session
from src.pb_review.application.general_review_service import GeneralReviewApplicationService
from src.pb_review.application.schemas import (
    CreateGeneralReviewRequest,
    DeleteReviewResponse,
    GeneralReviewOut,
    LikeCountResponse,
    LikeExistsResponse,
    ReportRequest,
    ReportResponse,
    ToggleLikeResponse,
    UserGeneralReviewOut,
    UserIdBody,
)

router = APIRouter(prefix="/general-reviews", tags=["general-reviews"])

_service = GeneralReviewApplicationService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Cache = Annotated[ResponseCache, Depends(get_response_cache)]
Invalidator = Annotated[CacheInvalidator, Depends(get_cache_invalidator)]


@router.get("/restaurant/{restaurant_id}/stats")
async def get_general_review_stats(restaurant_id: int, db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_restaurant_stats(db, restaurant_id))

    key = CacheKey.of(Resource.GENERAL_REVIEW_STATS, restaurant_id)
    return await read_through(cache, key, load)


@router.get("/restaurant/{restaurant_id}")
async def list_general_reviews_by_restaurant(
    restaurant_id: int, db: DbSession, cache: Cache
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_by_restaurant(db, restaurant_id))

    key = CacheKey.of(Resource.GENERAL_REVIEWS_BY_RESTAURANT, restaurant_id)
    return await read_through(cache, key, load)


@router.get("/user/{user_id}", response_model=list[UserGeneralReviewOut])
async def list_general_reviews_by_user(
    user_id: str, db: DbSession
) -> list[UserGeneralReviewOut]:
    return await _service.list_by_user(db, user_id)


@router.post("/report", response_model=ReportResponse, status_code=201)
async def report_general_review(body: ReportRequest, db: DbSession) -> ReportResponse:
    return await _service.report_review(db, body)


# --- Likes ---


@router.get("/{review_id}/likes", response_model=LikeCountResponse)
async def get_general_review_likes(review_id: int, db: DbSession) -> LikeCountResponse:
    return await _service.count_likes(db, review_id)


@router.post("/{review_id}/toggle-like", response_model=ToggleLikeResponse)
async def toggle_general_review_like(
    review_id: int,
    db: DbSession,
    invalidator: Invalidator,
    body: Annotated[UserIdBody, Body()] = UserIdBody(),
) -> ToggleLikeResponse:
    return await _service.toggle_like(db, review_id, body.user_id, invalidator)


@router.get("/{review_id}/like/{user_id}", response_model=LikeExistsResponse)
async def get_general_review_like(
    review_id: int, user_id: str, db: DbSession
) -> LikeExistsResponse:
    return await _service.has_like(db, review_id, user_id)


# --- Generic routes last ---


@router.get("")
async def list_general_reviews(db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_reviews(db))

    return await read_through(cache, CacheKey.of(Resource.GENERAL_REVIEWS), load)


@router.post("", response_model=GeneralReviewOut, status_code=201)
async def create_general_review(
    body: CreateGeneralReviewRequest, db: DbSession, invalidator: Invalidator
) -> GeneralReviewOut:
    return await _service.create_review(db, body, invalidator)


@router.delete("/{review_id}", response_model=DeleteReviewResponse)
async def delete_general_review(
    review_id: int,
    db: DbSession,
    invalidator: Invalidator,
    body: Annotated[UserIdBody, Body()] = UserIdBody(),
) -> DeleteReviewResponse:
    return await _service.delete_review(db, review_id, body.user_id, invalidator)


@router.get("/{review_id}")
async def get_general_review(review_id: int, db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_review(db, review_id))

    return await read_through(cache, CacheKey.of(Resource.GENERAL_REVIEW, review_id), load)
