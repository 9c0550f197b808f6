"""Domain models for pb_restaurant — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Restaurant:
    id: int
    name: str
    description: str | None
    location: str | None
    hours: str | None
    image_url: str | None
    created_at: datetime | None
    menu_item_count: int


@dataclass
class RestaurantReview:
    """Legacy restaurant_reviews row (read-only)."""

    id: int
    restaurant_id: int
    user_id: str | None
    rating: int | None
    text: str | None
    created_at: datetime | None
