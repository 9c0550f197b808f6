"""Cache policy: TTL per resource and the mutation → eviction table.

TTL 0 means "cache until evicted". Resources whose payload embeds review
aggregates or like counts are cached indefinitely and kept fresh by explicit
invalidation; the rest fall back to the configured default TTL.

The invalidation table maps each MutationType to a generator producing the
exact keys (and key families) whose cached payload embeds the changed data.
Restaurant basic listing/detail carry no rating field and are never evicted
by review changes. Like toggles never evict rating stats.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from src.pb_cache.domain.keys import CacheKey, Resource

UNTIL_EVICTED = 0

# Served with the configured default TTL; every other resource is cached
# until evicted.
DEFAULT_TTL_RESOURCES: frozenset[Resource] = frozenset({
    Resource.RESTAURANTS,
    Resource.RESTAURANT,
    Resource.RESTAURANT_REVIEWS,
    Resource.PROFILES,
    Resource.PROFILE,
})


def ttl_for(resource: Resource, default_ttl: int) -> int:
    if resource in DEFAULT_TTL_RESOURCES:
        return default_ttl
    return UNTIL_EVICTED


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


class MutationType(str, Enum):
    FOOD_REVIEW_CREATED = "FOOD_REVIEW_CREATED"
    FOOD_REVIEW_DELETED = "FOOD_REVIEW_DELETED"
    FOOD_REVIEW_LIKE_TOGGLED = "FOOD_REVIEW_LIKE_TOGGLED"
    GENERAL_REVIEW_CREATED = "GENERAL_REVIEW_CREATED"
    GENERAL_REVIEW_DELETED = "GENERAL_REVIEW_DELETED"
    GENERAL_REVIEW_LIKE_TOGGLED = "GENERAL_REVIEW_LIKE_TOGGLED"
    PROFILE_CREATED = "PROFILE_CREATED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    PROFILE_DELETED = "PROFILE_DELETED"


@dataclass(frozen=True)
class MutationEvent:
    """A committed write. Leaf ids only; missing parents are resolved later.

    affected_foods: (food_id, restaurant_id) pairs touched as a side effect,
    e.g. by the reviews removed together with a profile.
    affected_reviews: ids of food reviews removed as a side effect.
    """

    kind: MutationType
    review_id: int | None = None
    food_id: int | None = None
    restaurant_id: int | None = None
    profile_id: int | None = None
    affected_foods: tuple[tuple[int, int | None], ...] = ()
    affected_reviews: tuple[int, ...] = ()


@dataclass
class InvalidationPlan:
    keys: set[CacheKey] = field(default_factory=set)
    families: set[tuple[Resource, str | None]] = field(default_factory=set)

    def add(self, resource: Resource, id: int | str | None = None) -> None:
        self.keys.add(CacheKey.of(resource, id))

    def add_family(self, resource: Resource, id: int | str | None = None) -> None:
        self.families.add(CacheKey.of(resource, id).family)

    def merge(self, other: "InvalidationPlan") -> None:
        self.keys |= other.keys
        self.families |= other.families

    def __len__(self) -> int:
        return len(self.keys) + len(self.families)


def _food_review_changed(food_id: int | None, restaurant_id: int | None) -> InvalidationPlan:
    plan = InvalidationPlan()
    plan.add(Resource.FOOD_REVIEWS)
    plan.add(Resource.FOODS)
    plan.add(Resource.FOOD_REVIEW_DETAILS)
    plan.add_family(Resource.RESTAURANT_SEARCH)
    if food_id is not None:
        plan.add(Resource.FOOD_REVIEWS_BY_FOOD, food_id)
        plan.add(Resource.FOOD_REVIEW_STATS, food_id)
        plan.add(Resource.FOOD, food_id)
    if restaurant_id is not None:
        plan.add(Resource.FOOD_REVIEW_STATS_BY_RESTAURANT, restaurant_id)
        plan.add(Resource.FOOD_REVIEWS_BY_RESTAURANT, restaurant_id)
        plan.add(Resource.RESTAURANT_STATS, restaurant_id)
        plan.add_family(Resource.FOODS_BY_RESTAURANT, restaurant_id)
    return plan


def _general_review_changed(restaurant_id: int | None) -> InvalidationPlan:
    plan = InvalidationPlan()
    plan.add(Resource.GENERAL_REVIEWS)
    plan.add_family(Resource.RESTAURANT_SEARCH)
    if restaurant_id is not None:
        plan.add(Resource.GENERAL_REVIEWS_BY_RESTAURANT, restaurant_id)
        plan.add(Resource.GENERAL_REVIEW_STATS, restaurant_id)
        plan.add(Resource.RESTAURANT_STATS, restaurant_id)
    return plan


def _on_food_review_created(event: MutationEvent) -> InvalidationPlan:
    return _food_review_changed(event.food_id, event.restaurant_id)


def _on_food_review_deleted(event: MutationEvent) -> InvalidationPlan:
    plan = _food_review_changed(event.food_id, event.restaurant_id)
    if event.review_id is not None:
        plan.add(Resource.FOOD_REVIEW, event.review_id)
    return plan


def _on_food_review_like_toggled(event: MutationEvent) -> InvalidationPlan:
    plan = InvalidationPlan()
    plan.add(Resource.FOOD_REVIEWS)
    if event.food_id is not None:
        plan.add(Resource.FOOD_REVIEWS_BY_FOOD, event.food_id)
    if event.restaurant_id is not None:
        plan.add_family(Resource.FOODS_BY_RESTAURANT, event.restaurant_id)
    return plan


def _on_general_review_created(event: MutationEvent) -> InvalidationPlan:
    return _general_review_changed(event.restaurant_id)


def _on_general_review_deleted(event: MutationEvent) -> InvalidationPlan:
    plan = _general_review_changed(event.restaurant_id)
    if event.review_id is not None:
        plan.add(Resource.GENERAL_REVIEW, event.review_id)
    return plan


def _on_general_review_like_toggled(event: MutationEvent) -> InvalidationPlan:
    # Cached general review payloads carry no like count; the user listing
    # that does is never cached.
    return InvalidationPlan()


def _on_profile_created(event: MutationEvent) -> InvalidationPlan:
    plan = InvalidationPlan()
    plan.add(Resource.PROFILES)
    return plan


def _on_profile_updated(event: MutationEvent) -> InvalidationPlan:
    plan = _on_profile_created(event)
    if event.profile_id is not None:
        plan.add(Resource.PROFILE, event.profile_id)
    return plan


def _on_profile_deleted(event: MutationEvent) -> InvalidationPlan:
    plan = _on_profile_updated(event)
    for food_id, restaurant_id in event.affected_foods:
        plan.merge(_food_review_changed(food_id, restaurant_id))
    for review_id in event.affected_reviews:
        plan.add(Resource.FOOD_REVIEW, review_id)
    return plan


_RULES: dict[MutationType, Callable[[MutationEvent], InvalidationPlan]] = {
    MutationType.FOOD_REVIEW_CREATED: _on_food_review_created,
    MutationType.FOOD_REVIEW_DELETED: _on_food_review_deleted,
    MutationType.FOOD_REVIEW_LIKE_TOGGLED: _on_food_review_like_toggled,
    MutationType.GENERAL_REVIEW_CREATED: _on_general_review_created,
    MutationType.GENERAL_REVIEW_DELETED: _on_general_review_deleted,
    MutationType.GENERAL_REVIEW_LIKE_TOGGLED: _on_general_review_like_toggled,
    MutationType.PROFILE_CREATED: _on_profile_created,
    MutationType.PROFILE_UPDATED: _on_profile_updated,
    MutationType.PROFILE_DELETED: _on_profile_deleted,
}


def keys_to_invalidate(event: MutationEvent) -> InvalidationPlan:
    """Stateless lookup: the keys a committed mutation may have made stale."""
    return _RULES[event.kind](event)
