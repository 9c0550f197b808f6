"""Domain models for pb_food — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Food:
    id: int
    restaurant_id: int
    name: str
    description: str | None
    price: Decimal | None
    food_type: str | None
    image_url: str | None
    created_at: datetime | None
