"""Structured cache keys.

A key is {resource, id?, variant?}:
  resource — which read endpoint produced the payload
  id       — the path identifier (food id, restaurant id, ...), if any
  variant  — the raw query string as sent by the caller, if any

The variant is NOT normalized: "?q=a&x=1" and "?x=1&q=a" are two entries.
Only routes that declare query parameters key on the query string; those
resources are always evicted as a family. Every other route uses
CacheKey.of(resource, id) so stray query strings map to the same entry.
Invalidation can evict a single key or a whole (resource, id) family,
i.e. every variant at once.
"""

from dataclasses import dataclass
from enum import Enum

from starlette.requests import Request


class Resource(str, Enum):
    RESTAURANTS = "restaurants"
    RESTAURANT = "restaurant"
    RESTAURANT_SEARCH = "restaurant-search"
    RESTAURANT_STATS = "restaurant-stats"
    FOODS = "foods"
    FOOD = "food"
    FOODS_BY_RESTAURANT = "foods-by-restaurant"
    FOOD_REVIEWS = "food-reviews"
    FOOD_REVIEW = "food-review"
    FOOD_REVIEWS_BY_FOOD = "food-reviews-by-food"
    FOOD_REVIEWS_BY_RESTAURANT = "food-reviews-by-restaurant"
    FOOD_REVIEW_STATS = "food-review-stats"
    FOOD_REVIEW_STATS_BY_RESTAURANT = "food-review-stats-by-restaurant"
    FOOD_REVIEW_DETAILS = "food-review-details"
    GENERAL_REVIEWS = "general-reviews"
    GENERAL_REVIEW = "general-review"
    GENERAL_REVIEWS_BY_RESTAURANT = "general-reviews-by-restaurant"
    GENERAL_REVIEW_STATS = "general-review-stats"
    RESTAURANT_REVIEWS = "restaurant-reviews"
    PROFILES = "profiles"
    PROFILE = "profile"


@dataclass(frozen=True)
class CacheKey:
    resource: Resource
    id: str | None = None
    variant: str | None = None

    @classmethod
    def of(
        cls, resource: Resource, id: int | str | None = None, variant: str | None = None
    ) -> "CacheKey":
        return cls(
            resource=resource,
            id=None if id is None else str(id),
            variant=variant or None,
        )

    @classmethod
    def from_request(
        cls, resource: Resource, request: Request, id: int | str | None = None
    ) -> "CacheKey":
        """Derive the key of a read request: path id plus its raw query string."""
        return cls.of(resource, id, request.url.query)

    @property
    def family(self) -> tuple[Resource, str | None]:
        return self.resource, self.id

    def __str__(self) -> str:
        text = self.resource.value
        if self.id is not None:
            text = f"{text}:{self.id}"
        if self.variant is not None:
            text = f"{text}?{self.variant}"
        return text
