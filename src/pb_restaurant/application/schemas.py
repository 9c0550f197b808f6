"""Pydantic schemas for pb_restaurant API responses."""

from pydantic import BaseModel

from src.pb_restaurant.domain.models import Restaurant, RestaurantReview
from src.pb_stats.domain.stats import RestaurantStats

# ---------------------------------------------------------------------------
# Restaurant (basic listing/detail — carries no rating fields)
# ---------------------------------------------------------------------------


class RestaurantOut(BaseModel):
    id: int
    name: str
    description: str | None
    location: str | None
    hours: str | None
    image_url: str | None
    created_at: str | None
    menu_item_count: int

    @classmethod
    def from_domain(cls, r: Restaurant) -> "RestaurantOut":
        return cls(
            id=r.id,
            name=r.name,
            description=r.description,
            location=r.location,
            hours=r.hours,
            image_url=r.image_url,
            created_at=r.created_at.isoformat() if r.created_at else None,
            menu_item_count=r.menu_item_count,
        )


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


class RestaurantStatsOut(BaseModel):
    average_rating: float
    review_count: int
    average_value: float | None

    @classmethod
    def from_stats(cls, s: RestaurantStats) -> "RestaurantStatsOut":
        return cls(
            average_rating=s.average_rating,
            review_count=s.review_count,
            average_value=s.average_value,
        )


class RestaurantSearchItem(RestaurantOut):
    average_rating: float
    review_count: int
    average_value: float | None

    @classmethod
    def from_domain_with_stats(
        cls, r: Restaurant, s: RestaurantStats
    ) -> "RestaurantSearchItem":
        return cls(
            **RestaurantOut.from_domain(r).model_dump(),
            average_rating=s.average_rating,
            review_count=s.review_count,
            average_value=s.average_value,
        )


# ---------------------------------------------------------------------------
# Legacy restaurant reviews
# ---------------------------------------------------------------------------


class RestaurantReviewOut(BaseModel):
    id: int
    restaurant_id: int
    user_id: str | None
    rating: int | None
    text: str | None
    created_at: str | None

    @classmethod
    def from_domain(cls, r: RestaurantReview) -> "RestaurantReviewOut":
        return cls(
            id=r.id,
            restaurant_id=r.restaurant_id,
            user_id=r.user_id,
            rating=r.rating,
            text=r.text,
            created_at=r.created_at.isoformat() if r.created_at else None,
        )
