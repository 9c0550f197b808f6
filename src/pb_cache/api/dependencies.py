"""FastAPI dependencies exposing the application's cache.

Usage in any router:
    from src.pb_cache.api.dependencies import get_response_cache

    @router.get("/thing")
    async def thing(cache: Annotated[ResponseCache, Depends(get_response_cache)]):
        ...
"""

from typing import Annotated

from fastapi import Depends, Request

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.infrastructure.memory_cache import ResponseCache


def get_response_cache(request: Request) -> ResponseCache:
    """Return the ResponseCache created in the app factory."""
    cache: ResponseCache = request.app.state.response_cache
    return cache


def get_cache_invalidator(
    cache: Annotated[ResponseCache, Depends(get_response_cache)],
) -> CacheInvalidator:
    return CacheInvalidator(cache)
