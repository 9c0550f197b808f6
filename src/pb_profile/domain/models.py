"""Domain models for pb_profile — pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Profile:
    """A user's public profile, linked 1:1 to an identity-provider user.

    name_change counts the renames still allowed: 1 for a fresh profile,
    0 once the single rename has been used.
    """

    id: int
    name: str
    auth_id: str
    name_change: int
    created_at: datetime | None


@dataclass(frozen=True)
class OwnedFoodReview:
    """One of the user's food reviews with the food and restaurant it belongs to."""

    review_id: int
    food_id: int
    restaurant_id: int
