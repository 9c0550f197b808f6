"""CacheInvalidator — applies the invalidation table to a ResponseCache.

Called by application services only after their write has committed. Missing
parent ids are resolved first (food review → food → restaurant, general
review → restaurant) so restaurant-scoped keys can be built from a leaf id.
Deleted rows cannot be looked up afterwards, so services pass the ids they
read before deleting.
"""

import dataclasses
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.domain.policy import (
    InvalidationPlan,
    MutationEvent,
    MutationType,
    keys_to_invalidate,
)
from src.pb_cache.domain.repository import EntityLookupProtocol
from src.pb_cache.infrastructure.lookup import EntityLookupRepository
from src.pb_cache.infrastructure.memory_cache import ResponseCache

logger = logging.getLogger("pb.cache")

_FOOD_REVIEW_EVENTS = frozenset({
    MutationType.FOOD_REVIEW_CREATED,
    MutationType.FOOD_REVIEW_DELETED,
    MutationType.FOOD_REVIEW_LIKE_TOGGLED,
})
# General review like toggles evict nothing, so they need no lookup
_GENERAL_REVIEW_EVENTS = frozenset({
    MutationType.GENERAL_REVIEW_CREATED,
    MutationType.GENERAL_REVIEW_DELETED,
})


class CacheInvalidator:
    def __init__(
        self,
        cache: ResponseCache,
        lookup: EntityLookupProtocol | None = None,
    ) -> None:
        self._cache = cache
        self._lookup: EntityLookupProtocol = lookup or EntityLookupRepository()

    async def resolve(self, db: AsyncSession, event: MutationEvent) -> MutationEvent:
        food_id = event.food_id
        restaurant_id = event.restaurant_id

        if event.kind in _FOOD_REVIEW_EVENTS:
            if food_id is None and event.review_id is not None:
                food_id = await self._lookup.food_id_for_food_review(db, event.review_id)
            if restaurant_id is None and food_id is not None:
                restaurant_id = await self._lookup.restaurant_id_for_food(db, food_id)
        elif event.kind in _GENERAL_REVIEW_EVENTS:
            if restaurant_id is None and event.review_id is not None:
                restaurant_id = await self._lookup.restaurant_id_for_general_review(
                    db, event.review_id
                )

        return dataclasses.replace(event, food_id=food_id, restaurant_id=restaurant_id)

    def apply(self, plan: InvalidationPlan) -> int:
        removed = 0
        for key in plan.keys:
            removed += int(self._cache.delete(key))
        for resource, id in plan.families:
            removed += self._cache.delete_family(resource, id)
        return removed

    async def invalidate(self, db: AsyncSession, event: MutationEvent) -> InvalidationPlan:
        resolved = await self.resolve(db, event)
        plan = keys_to_invalidate(resolved)
        removed = self.apply(plan)
        logger.info(
            "Invalidated %s: %d keys targeted, %d entries evicted",
            event.kind.value,
            len(plan),
            removed,
        )
        return plan
