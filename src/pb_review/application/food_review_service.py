"""FoodReviewApplicationService — reads, writes and likes for food reviews.

Writes commit inside try/except with rollback. Cache invalidation runs
only after a successful commit, so a failed write leaves the cache untouched.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.domain.policy import MutationEvent, MutationType
from src.pb_common.errors import (
    FoodNotFoundError,
    FoodReviewNotFoundError,
    NotReviewOwnerError,
    UserIdRequiredError,
)
from src.pb_review.application.schemas import (
    CreateFoodReviewRequest,
    DeleteReviewResponse,
    FoodReviewOut,
    FoodReviewWithFoodName,
    FoodReviewWithLikes,
    LikeCountResponse,
    LikeExistsResponse,
    RestaurantReviewDetail,
    ReviewStatsOut,
    ToggleLikeResponse,
    UserFoodReviewOut,
)
from src.pb_review.domain.models import FoodReview
from src.pb_review.domain.repository import FoodReviewRepositoryProtocol
from src.pb_review.infrastructure.food_review_persistence import FoodReviewRepository
from src.pb_stats.domain.stats import food_stats, group_ratings


class FoodReviewApplicationService:
    def __init__(self, repo: FoodReviewRepositoryProtocol | None = None) -> None:
        self._repo: FoodReviewRepositoryProtocol = repo or FoodReviewRepository()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_reviews(self, db: AsyncSession) -> list[FoodReviewWithLikes]:
        reviews = await self._repo.list_reviews(db)
        return [FoodReviewWithLikes.from_domain(r) for r in reviews]

    async def get_review(self, db: AsyncSession, review_id: int) -> FoodReviewOut:
        review = await self._get_or_raise(db, review_id)
        return FoodReviewOut.from_domain(review)

    async def list_by_food(self, db: AsyncSession, food_id: int) -> list[FoodReviewWithLikes]:
        reviews = await self._repo.list_by_food(db, food_id)
        return [FoodReviewWithLikes.from_domain(r) for r in reviews]

    async def list_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[FoodReviewWithFoodName]:
        reviews = await self._repo.list_by_restaurant(db, restaurant_id)
        return [FoodReviewWithFoodName.from_domain(r) for r in reviews]

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[UserFoodReviewOut]:
        reviews = await self._repo.list_by_user(db, user_id)
        return [UserFoodReviewOut.from_domain(r) for r in reviews]

    async def get_food_stats(self, db: AsyncSession, food_id: int) -> ReviewStatsOut:
        ratings = await self._repo.list_ratings_for_food(db, food_id)
        return ReviewStatsOut.from_stats(food_stats([r.rating for r in ratings], None))

    async def get_restaurant_food_stats(
        self, db: AsyncSession, restaurant_id: int
    ) -> dict[int, ReviewStatsOut]:
        """Stats for every food of the restaurant, keyed by food id."""
        food_ids = await self._repo.list_food_ids_for_restaurant(db, restaurant_id)
        by_food = group_ratings(
            await self._repo.list_ratings_for_restaurant(db, restaurant_id), "food_id"
        )
        return {
            food_id: ReviewStatsOut.from_stats(food_stats(by_food.get(food_id, []), None))
            for food_id in food_ids
        }

    async def get_review_details(self, db: AsyncSession) -> list[RestaurantReviewDetail]:
        """Per-restaurant food review count and average, most reviewed first."""
        restaurants = await self._repo.list_restaurants(db)
        by_restaurant = group_ratings(
            await self._repo.list_ratings_by_restaurant(db), "restaurant_id"
        )
        details = []
        for r in restaurants:
            stats = food_stats(by_restaurant.get(r.id, []), None)
            details.append(
                RestaurantReviewDetail(
                    restaurant_id=r.id,
                    restaurant_name=r.name,
                    review_count=stats.review_count,
                    average_rating=stats.average_rating,
                )
            )
        details.sort(key=lambda d: d.review_count, reverse=True)
        return details

    async def count_likes(self, db: AsyncSession, review_id: int) -> LikeCountResponse:
        return LikeCountResponse(likes=await self._repo.count_likes(db, review_id))

    async def has_like(
        self, db: AsyncSession, review_id: int, user_id: str
    ) -> LikeExistsResponse:
        return LikeExistsResponse(exists=await self._repo.has_like(db, review_id, user_id))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_review(
        self,
        db: AsyncSession,
        body: CreateFoodReviewRequest,
        invalidator: CacheInvalidator,
    ) -> FoodReviewOut:
        try:
            if not await self._repo.food_exists(db, body.food_id):
                raise FoodNotFoundError(body.food_id)
            review = await self._repo.create_review(
                db, body.user_id, body.food_id, body.rating, body.text, body.anonymous
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await invalidator.invalidate(
            db,
            MutationEvent(
                kind=MutationType.FOOD_REVIEW_CREATED,
                review_id=review.id,
                food_id=review.food_id,
            ),
        )
        return FoodReviewOut.from_domain(review)

    async def delete_review(
        self,
        db: AsyncSession,
        review_id: int,
        user_id: str | None,
        invalidator: CacheInvalidator,
    ) -> DeleteReviewResponse:
        if not user_id:
            raise UserIdRequiredError()

        try:
            review = await self._get_or_raise(db, review_id)
            if review.user_id != user_id:
                raise NotReviewOwnerError(review_id)
            await self._repo.delete_review(db, review_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        # The row is gone; its food id was read before deleting
        await invalidator.invalidate(
            db,
            MutationEvent(
                kind=MutationType.FOOD_REVIEW_DELETED,
                review_id=review_id,
                food_id=review.food_id,
            ),
        )
        return DeleteReviewResponse()

    async def toggle_like(
        self,
        db: AsyncSession,
        review_id: int,
        user_id: str | None,
        invalidator: CacheInvalidator,
    ) -> ToggleLikeResponse:
        if not user_id:
            raise UserIdRequiredError()

        try:
            review = await self._get_or_raise(db, review_id)
            liked = not await self._repo.has_like(db, review_id, user_id)
            if liked:
                await self._repo.add_like(db, review_id, user_id)
            else:
                await self._repo.remove_like(db, review_id, user_id)
            likes = await self._repo.count_likes(db, review_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await invalidator.invalidate(
            db,
            MutationEvent(
                kind=MutationType.FOOD_REVIEW_LIKE_TOGGLED,
                review_id=review_id,
                food_id=review.food_id,
            ),
        )
        return ToggleLikeResponse(likes=likes, liked=liked)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_or_raise(self, db: AsyncSession, review_id: int) -> FoodReview:
        review = await self._repo.get_review(db, review_id)
        if review is None:
            raise FoodReviewNotFoundError(review_id)
        return review
