# tests/unit/test_cache_invalidator.py
"""CacheInvalidator: parent-id resolution and eviction against a real cache."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.domain.keys import CacheKey, Resource
from src.pb_cache.domain.policy import InvalidationPlan, MutationEvent, MutationType
from src.pb_cache.infrastructure.memory_cache import ResponseCache


@pytest.fixture
def db():
    return MagicMock()


@pytest.fixture
def lookup():
    mock = MagicMock()
    mock.food_id_for_food_review = AsyncMock(return_value=5)
    mock.restaurant_id_for_food = AsyncMock(return_value=9)
    mock.restaurant_id_for_general_review = AsyncMock(return_value=3)
    return mock


@pytest.fixture
def cache() -> ResponseCache:
    return ResponseCache()


class TestResolve:
    @pytest.mark.asyncio
    async def test_food_review_resolves_food_then_restaurant(self, db, lookup, cache) -> None:
        inv = CacheInvalidator(cache, lookup=lookup)
        event = MutationEvent(kind=MutationType.FOOD_REVIEW_LIKE_TOGGLED, review_id=1)

        resolved = await inv.resolve(db, event)

        assert resolved.food_id == 5
        assert resolved.restaurant_id == 9
        lookup.food_id_for_food_review.assert_awaited_once_with(db, 1)

    @pytest.mark.asyncio
    async def test_known_food_skips_review_lookup(self, db, lookup, cache) -> None:
        inv = CacheInvalidator(cache, lookup=lookup)
        event = MutationEvent(kind=MutationType.FOOD_REVIEW_CREATED, review_id=1, food_id=7)

        resolved = await inv.resolve(db, event)

        lookup.food_id_for_food_review.assert_not_awaited()
        lookup.restaurant_id_for_food.assert_awaited_once_with(db, 7)
        assert resolved.food_id == 7

    @pytest.mark.asyncio
    async def test_general_review_resolves_restaurant(self, db, lookup, cache) -> None:
        inv = CacheInvalidator(cache, lookup=lookup)
        event = MutationEvent(kind=MutationType.GENERAL_REVIEW_DELETED, review_id=4)

        resolved = await inv.resolve(db, event)

        assert resolved.restaurant_id == 3

    @pytest.mark.asyncio
    async def test_general_like_toggle_skips_lookup(self, db, lookup, cache) -> None:
        inv = CacheInvalidator(cache, lookup=lookup)
        listing = CacheKey.of(Resource.GENERAL_REVIEWS_BY_RESTAURANT, 3)
        cache.set(listing, [{"id": 4}])

        await inv.invalidate(
            db, MutationEvent(kind=MutationType.GENERAL_REVIEW_LIKE_TOGGLED, review_id=4)
        )

        lookup.restaurant_id_for_general_review.assert_not_awaited()
        assert cache.get(listing) == [{"id": 4}]

    @pytest.mark.asyncio
    async def test_profile_events_need_no_lookup(self, db, lookup, cache) -> None:
        inv = CacheInvalidator(cache, lookup=lookup)
        await inv.resolve(db, MutationEvent(kind=MutationType.PROFILE_UPDATED, profile_id=1))
        lookup.food_id_for_food_review.assert_not_awaited()
        lookup.restaurant_id_for_general_review.assert_not_awaited()


class TestInvalidate:
    @pytest.mark.asyncio
    async def test_evicts_keys_and_families(self, db, lookup, cache) -> None:
        by_food = CacheKey.of(Resource.FOOD_REVIEWS_BY_FOOD, 5)
        stats = CacheKey.of(Resource.RESTAURANT_STATS, 9)
        search = CacheKey.of(Resource.RESTAURANT_SEARCH, None, "q=taco")
        unrelated = CacheKey.of(Resource.RESTAURANT, 9)
        for key in (by_food, stats, search, unrelated):
            cache.set(key, "cached")

        inv = CacheInvalidator(cache, lookup=lookup)
        await inv.invalidate(
            db, MutationEvent(kind=MutationType.FOOD_REVIEW_CREATED, review_id=1, food_id=5)
        )

        assert by_food not in cache
        assert stats not in cache
        assert search not in cache
        assert unrelated in cache

    def test_apply_counts_removed_entries(self, cache) -> None:
        cache.set(CacheKey.of(Resource.FOODS), 1)
        cache.set(CacheKey.of(Resource.FOODS_BY_RESTAURANT, 9, "q=a"), 2)
        cache.set(CacheKey.of(Resource.FOODS_BY_RESTAURANT, 9, "q=b"), 3)
        inv = CacheInvalidator(cache, lookup=MagicMock())

        plan = InvalidationPlan()
        plan.add(Resource.FOODS)
        plan.add(Resource.FOOD, 1)  # absent: no-op
        plan.add_family(Resource.FOODS_BY_RESTAURANT, 9)

        assert inv.apply(plan) == 3
        assert len(cache) == 0
