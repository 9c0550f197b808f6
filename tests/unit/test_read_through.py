# tests/unit/test_read_through.py
"""read_through: hit/miss flow and stores racing an invalidation."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.application.read_through import read_through
from src.pb_cache.domain.keys import CacheKey, Resource
from src.pb_cache.domain.policy import MutationEvent, MutationType
from src.pb_cache.infrastructure.memory_cache import ResponseCache

STATS_9 = CacheKey.of(Resource.RESTAURANT_STATS, 9)


@pytest.fixture
def cache() -> ResponseCache:
    return ResponseCache()


class TestReadThrough:
    @pytest.mark.asyncio
    async def test_second_read_is_served_from_cache(self, cache):
        loader = AsyncMock(return_value={"review_count": 2})

        assert await read_through(cache, STATS_9, loader) == {"review_count": 2}
        assert await read_through(cache, STATS_9, loader) == {"review_count": 2}

        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_null_payload_is_cached(self, cache):
        loader = AsyncMock(return_value=None)

        assert await read_through(cache, STATS_9, loader) is None
        assert await read_through(cache, STATS_9, loader) is None

        loader.assert_awaited_once()
        assert cache.stats().hits == 1

    @pytest.mark.asyncio
    async def test_loader_error_stores_nothing(self, cache):
        loader = AsyncMock(side_effect=RuntimeError("db down"))

        with pytest.raises(RuntimeError):
            await read_through(cache, STATS_9, loader)

        assert STATS_9 not in cache


class TestInvalidationDuringLoad:
    @pytest.mark.asyncio
    async def test_stale_load_is_not_stored(self, cache):
        loading = asyncio.Event()
        release = asyncio.Event()

        async def slow_loader():
            loading.set()
            await release.wait()
            # rows read before the write committed
            return {"review_count": 0}

        reader = asyncio.create_task(read_through(cache, STATS_9, slow_loader))
        await loading.wait()

        invalidator = CacheInvalidator(cache, lookup=MagicMock())
        await invalidator.invalidate(
            MagicMock(), MutationEvent(kind=MutationType.GENERAL_REVIEW_CREATED, restaurant_id=9)
        )
        release.set()

        assert await reader == {"review_count": 0}
        assert STATS_9 not in cache

    @pytest.mark.asyncio
    async def test_next_read_reloads_fresh_rows(self, cache):
        cache.delete(STATS_9)
        loader = AsyncMock(return_value={"review_count": 1})

        assert await read_through(cache, STATS_9, loader) == {"review_count": 1}
        assert cache.get(STATS_9) == {"review_count": 1}
