"""pb_restaurant REST endpoints.

GET /restaurants                    — paginated list {data, pagination}
GET /restaurants/search?q=          — matches with rating stats (blank q → list)
GET /restaurants/{restaurant_id}    — basic detail (no rating fields)
GET /restaurants/{restaurant_id}/stats
GET /restaurant-reviews             — legacy restaurant_reviews table
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.api.dependencies import get_response_cache
from src.pb_cache.application.read_through import read_through
from src.pb_cache.domain.keys import CacheKey, Resource
from src.pb_cache.infrastructure.memory_cache import ResponseCache
from src.pb_common.database import get_db_session
from src.pb_restaurant.application.service import RestaurantApplicationService

router = APIRouter(prefix="/restaurants", tags=["restaurants"])
legacy_review_router = APIRouter(prefix="/restaurant-reviews", tags=["restaurants"])

_service = RestaurantApplicationService()


@router.get("")
async def list_restaurants(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_restaurants(db, page, limit))

    return await read_through(cache, CacheKey.from_request(Resource.RESTAURANTS, request), load)


@router.get("/search")
async def search_restaurants(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
    q: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1),
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.search_restaurants(db, q, page, limit))

    key = CacheKey.from_request(Resource.RESTAURANT_SEARCH, request)
    return await read_through(cache, key, load)


@router.get("/{restaurant_id}")
async def get_restaurant(
    restaurant_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_restaurant(db, restaurant_id))

    key = CacheKey.of(Resource.RESTAURANT, restaurant_id)
    return await read_through(cache, key, load)


@router.get("/{restaurant_id}/stats")
async def get_restaurant_stats(
    restaurant_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_restaurant_stats(db, restaurant_id))

    key = CacheKey.of(Resource.RESTAURANT_STATS, restaurant_id)
    return await read_through(cache, key, load)


@legacy_review_router.get("")
async def list_restaurant_reviews(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_restaurant_reviews(db))

    key = CacheKey.of(Resource.RESTAURANT_REVIEWS)
    return await read_through(cache, key, load)
