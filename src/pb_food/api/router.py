"""pb_food REST endpoints.

GET /foods                              — {data: [food + stats]}
GET /foods/restaurant/{restaurant_id}   — [food + stats], optional ?q= search
GET /foods/{food_id}                    — food + stats
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
from src.pb_food.application.service import FoodApplicationService

router = APIRouter(prefix="/foods", tags=["foods"])

_service = FoodApplicationService()


@router.get("")
async def list_foods(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_foods(db))

    return await read_through(cache, CacheKey.of(Resource.FOODS), load)


@router.get("/restaurant/{restaurant_id}")
async def list_foods_by_restaurant(
    restaurant_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
    q: str | None = Query(None, description="Search term on name/description"),
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.list_foods_by_restaurant(db, restaurant_id, q))

    key = CacheKey.from_request(Resource.FOODS_BY_RESTAURANT, request, restaurant_id)
    return await read_through(cache, key, load)


@router.get("/{food_id}")
async def get_food(
    food_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> Any:
    async def load() -> Any:
        return jsonable_encoder(await _service.get_food(db, food_id))

    return await read_through(cache, CacheKey.of(Resource.FOOD, food_id), load)
