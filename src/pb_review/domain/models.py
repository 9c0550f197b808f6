"""Domain models for pb_review — pure dataclasses, no business logic.

Listing queries join extra columns (like counts, food/restaurant names);
those land in the optional fields and stay None when not selected.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class FoodReview:
    id: int
    user_id: str
    food_id: int
    rating: int
    text: str | None
    anonymous: bool
    created_at: datetime | None
    like_count: int | None = None
    food_name: str | None = None
    food_type: str | None = None
    restaurant_id: int | None = None
    restaurant_name: str | None = None


@dataclass
class GeneralReview:
    id: int
    user_id: str
    restaurant_id: int
    rating: int
    text: str | None
    anonymous: bool
    created_at: datetime | None
    like_count: int | None = None
    restaurant_name: str | None = None


@dataclass
class GeneralReviewReport:
    id: int
    general_review_id: int
    user_id: str
    reason: str | None
    created_at: datetime | None


@dataclass
class RestaurantSummary:
    """id + name, used by the per-restaurant food review details."""

    id: int
    name: str
