# src/pb_review/application/schemas.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.pb_review.domain.models import GeneralReviewReport
from src.pb_stats.domain.stats import FoodStats

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreateFoodReviewRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    food_id: int
    rating: int = Field(..., ge=1, le=5)
    text: str | None = None
    anonymous: bool = False


class CreateGeneralReviewRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    restaurant_id: int
    rating: int = Field(..., ge=1, le=5)
    text: str | None = None
    anonymous: bool = False


class UserIdBody(BaseModel):
    """DELETE and toggle-like bodies. A missing user_id is a 400, not a 422."""

    user_id: str | None = None

    @field_validator("user_id")
    @classmethod
    def blank_is_missing(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class ReportRequest(BaseModel):
    general_review_id: int | None = None
    reason: str | None = None
    user_id: str | None = None


# ---------------------------------------------------------------------------
# Review rows
# ---------------------------------------------------------------------------


class _ReviewOut(BaseModel):
    @classmethod
    def from_domain(cls, review: Any) -> Any:
        """Copy every declared field off a domain review."""
        return cls(**{name: getattr(review, name) for name in cls.model_fields})


class FoodReviewOut(_ReviewOut):
    id: int
    user_id: str
    food_id: int
    rating: int
    text: str | None
    anonymous: bool
    created_at: datetime | None


class FoodReviewWithLikes(FoodReviewOut):
    like_count: int


class FoodReviewWithFoodName(FoodReviewOut):
    food_name: str | None


class UserFoodReviewOut(FoodReviewWithLikes):
    food_name: str | None
    food_type: str | None
    restaurant_id: int | None
    restaurant_name: str | None


class GeneralReviewOut(_ReviewOut):
    id: int
    user_id: str
    restaurant_id: int
    rating: int
    text: str | None
    anonymous: bool
    created_at: datetime | None


class UserGeneralReviewOut(GeneralReviewOut):
    restaurant_name: str | None
    like_count: int


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------


class ReviewStatsOut(BaseModel):
    review_count: int
    average_rating: float

    @classmethod
    def from_stats(cls, s: FoodStats) -> "ReviewStatsOut":
        return cls(review_count=s.review_count, average_rating=s.average_rating)


class RestaurantReviewDetail(BaseModel):
    restaurant_id: int
    restaurant_name: str
    review_count: int
    average_rating: float


# ---------------------------------------------------------------------------
# Likes / misc
# ---------------------------------------------------------------------------


class LikeCountResponse(BaseModel):
    likes: int


class ToggleLikeResponse(BaseModel):
    likes: int
    liked: bool


class LikeExistsResponse(BaseModel):
    exists: bool


class DeleteReviewResponse(BaseModel):
    message: str = "Review deleted successfully"


class ReportOut(BaseModel):
    id: int
    general_review_id: int
    user_id: str
    reason: str | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, r: GeneralReviewReport) -> "ReportOut":
        return cls(
            id=r.id,
            general_review_id=r.general_review_id,
            user_id=r.user_id,
            reason=r.reason,
            created_at=r.created_at,
        )


class ReportResponse(BaseModel):
    message: str = "Report submitted successfully"
    report: ReportOut
