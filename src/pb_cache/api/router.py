"""Cache admin endpoints. These bypass key derivation entirely.

GET  /cache/stats — cumulative hits/misses, current key count, hit rate
POST /cache/clear — flush every entry
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from src.pb_cache.api.dependencies import get_response_cache
from src.pb_cache.infrastructure.memory_cache import ResponseCache

router = APIRouter(prefix="/cache", tags=["cache"])


@router.get("/stats")
async def cache_stats(
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> dict[str, Any]:
    stats = cache.stats()
    return {
        "hits": stats.hits,
        "misses": stats.misses,
        "keys": stats.keys,
        "hit_rate": stats.hit_rate,
    }


@router.post("/clear")
async def clear_cache(
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> dict[str, int]:
    return {"cleared": cache.flush_all()}
