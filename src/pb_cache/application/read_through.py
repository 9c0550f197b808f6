"""Read-through helper used by every cacheable GET route.

    key = CacheKey.from_request(Resource.FOODS_BY_RESTAURANT, request, restaurant_id)
    return await read_through(cache, key, load)

The loader must return a JSON-ready value (dicts/lists of primitives, or
None). If it raises, nothing is stored and the error propagates to the
exception handlers. If any eviction runs while the loader is awaited, the
result is returned but not stored.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from config.settings import settings
from src.pb_cache.domain.keys import CacheKey
from src.pb_cache.domain.policy import ttl_for
from src.pb_cache.infrastructure.memory_cache import MISS, ResponseCache

logger = logging.getLogger("pb.cache")


async def read_through(
    cache: ResponseCache,
    key: CacheKey,
    loader: Callable[[], Awaitable[Any]],
) -> Any:
    if not settings.CACHE_ENABLED:
        return await loader()

    generation = cache.generation
    cached = cache.get(key, MISS)
    if cached is not MISS:
        logger.debug("cache hit %s", key)
        return cached

    logger.debug("cache miss %s", key)
    value = await loader()
    ttl = ttl_for(key.resource, settings.CACHE_DEFAULT_TTL_SECONDS)
    if not cache.set_if_generation(key, value, ttl, generation):
        # an invalidation ran while loading; the value may predate it
        logger.debug("cache store skipped %s", key)
    return value
