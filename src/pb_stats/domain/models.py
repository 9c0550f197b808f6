"""Raw rows consumed by the stats functions — pure dataclasses."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class FoodRating:
    """One food review's rating."""

    food_id: int
    rating: int


@dataclass(frozen=True)
class RestaurantRating:
    """A rating attributed directly to a restaurant (general review)."""

    restaurant_id: int
    rating: int


@dataclass(frozen=True)
class FoodPrice:
    food_id: int
    restaurant_id: int
    price: Decimal | None
