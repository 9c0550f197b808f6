"""Pydantic schemas for pb_food API responses.

Every food payload embeds its FoodStats (review_count, average_rating,
value), so food caches are evicted on food-review changes.
"""

from pydantic import BaseModel

from src.pb_food.domain.models import Food
from src.pb_stats.domain.stats import FoodStats


class FoodWithStats(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: str | None
    price: float | None
    food_type: str | None
    image_url: str | None
    created_at: str | None
    review_count: int
    average_rating: float
    value: float | None

    @classmethod
    def from_domain(cls, f: Food, stats: FoodStats) -> "FoodWithStats":
        return cls(
            id=f.id,
            restaurant_id=f.restaurant_id,
            name=f.name,
            description=f.description,
            price=float(f.price) if f.price is not None else None,
            food_type=f.food_type,
            image_url=f.image_url,
            created_at=f.created_at.isoformat() if f.created_at else None,
            review_count=stats.review_count,
            average_rating=stats.average_rating,
            value=stats.value,
        )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name or description."""
        term = term.lower()
        return term in self.name.lower() or (
            self.description is not None and term in self.description.lower()
        )
