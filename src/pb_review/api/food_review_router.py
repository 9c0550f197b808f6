"""pb_review food review endpoints (/food-reviews).

Specific paths are registered before the generic /{review_id} routes.
Per-user listings and like lookups are never cached.
"""

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
from src.pb_review.application.food_review_service import FoodReviewApplicationService
from src.pb_review.application.schemas import (
    CreateFoodReviewRequest,
    DeleteReviewResponse,
    FoodReviewOut,
    LikeCountResponse,
    LikeExistsResponse,
    ToggleLikeResponse,
    UserFoodReviewOut,
    UserIdBody,
)

router = APIRouter(prefix="/food-reviews", tags=["food-reviews"])

_service = FoodReviewApplicationService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Cache = Annotated[ResponseCache, Depends(get_response_cache)]
Invalidator = Annotated[CacheInvalidator, Depends(get_cache_invalidator)]


@router.get("/food-review-details")
async def get_food_review_details(db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_review_details(db))

    return await read_through(cache, CacheKey.of(Resource.FOOD_REVIEW_DETAILS), load)


@router.get("/food/{food_id}/stats")
async def get_food_review_stats(food_id: int, db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_food_stats(db, food_id))

    return await read_through(cache, CacheKey.of(Resource.FOOD_REVIEW_STATS, food_id), load)


@router.get("/restaurant/{restaurant_id}/stats")
async def get_food_review_stats_by_restaurant(
    restaurant_id: int, db: DbSession, cache: Cache
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_restaurant_food_stats(db, restaurant_id))

    key = CacheKey.of(Resource.FOOD_REVIEW_STATS_BY_RESTAURANT, restaurant_id)
    return await read_through(cache, key, load)


@router.get("/food/{food_id}")
async def list_food_reviews_by_food(food_id: int, db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_by_food(db, food_id))

    return await read_through(cache, CacheKey.of(Resource.FOOD_REVIEWS_BY_FOOD, food_id), load)


@router.get("/restaurant/{restaurant_id}")
async def list_food_reviews_by_restaurant(
    restaurant_id: int, db: DbSession, cache: Cache
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_by_restaurant(db, restaurant_id))

    key = CacheKey.of(Resource.FOOD_REVIEWS_BY_RESTAURANT, restaurant_id)
    return await read_through(cache, key, load)


@router.get("/user/{user_id}", response_model=list[UserFoodReviewOut])
async def list_food_reviews_by_user(user_id: str, db: DbSession) -> list[UserFoodReviewOut]:
    return await _service.list_by_user(db, user_id)


# --- Likes ---


@router.get("/{review_id}/likes", response_model=LikeCountResponse)
async def get_food_review_likes(review_id: int, db: DbSession) -> LikeCountResponse:
    return await _service.count_likes(db, review_id)


@router.post("/{review_id}/toggle-like", response_model=ToggleLikeResponse)
async def toggle_food_review_like(
    review_id: int,
    db: DbSession,
    invalidator: Invalidator,
    body: Annotated[UserIdBody, Body()] = UserIdBody(),
) -> ToggleLikeResponse:
    return await _service.toggle_like(db, review_id, body.user_id, invalidator)


@router.get("/{review_id}/like/{user_id}", response_model=LikeExistsResponse)
async def get_food_review_like(review_id: int, user_id: str, db: DbSession) -> LikeExistsResponse:
    return await _service.has_like(db, review_id, user_id)


# --- Generic routes last ---


@router.get("")
async def list_food_reviews(db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_reviews(db))

    return await read_through(cache, CacheKey.of(Resource.FOOD_REVIEWS), load)


@router.post("", response_model=FoodReviewOut, status_code=201)
async def create_food_review(
    body: CreateFoodReviewRequest, db: DbSession, invalidator: Invalidator
) -> FoodReviewOut:
    return await _service.create_review(db, body, invalidator)


@router.delete("/{review_id}", response_model=DeleteReviewResponse)
async def delete_food_review(
    review_id: int,
    db: DbSession,
    invalidator: Invalidator,
    body: Annotated[UserIdBody, Body()] = UserIdBody(),
) -> DeleteReviewResponse:
    return await _service.delete_review(db, review_id, body.user_id, invalidator)


@router.get("/{review_id}")
async def get_food_review(review_id: int, db: DbSession, cache: Cache) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_review(db, review_id))

    return await read_through(cache, CacheKey.of(Resource.FOOD_REVIEW, review_id), load)
