"""GeneralReviewApplicationService — restaurant-scoped reviews, likes, reports."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_cache.application.invalidator import CacheInvalidator
from src.pb_cache.domain.policy import MutationEvent, MutationType
from src.pb_common.errors import (
    GeneralReviewNotFoundError,
    MissingFieldError,
    NotReviewOwnerError,
    RestaurantNotFoundError,
    UserIdRequiredError,
)
from src.pb_review.application.schemas import (
    CreateGeneralReviewRequest,
    DeleteReviewResponse,
    GeneralReviewOut,
    LikeCountResponse,
    LikeExistsResponse,
    ReportOut,
    ReportRequest,
    ReportResponse,
    ReviewStatsOut,
    ToggleLikeResponse,
    UserGeneralReviewOut,
)
from src.pb_review.domain.models import GeneralReview
from src.pb_review.domain.repository import GeneralReviewRepositoryProtocol
from src.pb_review.infrastructure.general_review_persistence import GeneralReviewRepository
from src.pb_stats.domain.stats import food_stats


class GeneralReviewApplicationService:
    def __init__(self, repo: GeneralReviewRepositoryProtocol | None = None) -> None:
        self._repo: GeneralReviewRepositoryProtocol = repo or GeneralReviewRepository()

    async def list_reviews(self, db: AsyncSession) -> list[GeneralReviewOut]:
        return [GeneralReviewOut.from_domain(r) for r in await self._repo.list_reviews(db)]

    async def get_review(self, db: AsyncSession, review_id: int) -> GeneralReviewOut:
        return GeneralReviewOut.from_domain(await self._get_or_raise(db, review_id))

    async def list_by_restaurant(
        self, db: AsyncSession, restaurant_id: int
    ) -> list[GeneralReviewOut]:
        reviews = await self._repo.list_by_restaurant(db, restaurant_id)
        return [GeneralReviewOut.from_domain(r) for r in reviews]

    async def list_by_user(self, db: AsyncSession, user_id: str) -> list[UserGeneralReviewOut]:
        reviews = await self._repo.list_by_user(db, user_id)
        return [UserGeneralReviewOut.from_domain(r) for r in reviews]

    async def get_restaurant_stats(self, db: AsyncSession, restaurant_id: int) -> ReviewStatsOut:
        # Rating aggregate only; a general review has no price to score value against
        ratings = await self._repo.list_ratings_for_restaurant(db, restaurant_id)
        return ReviewStatsOut.from_stats(food_stats([r.rating for r in ratings], None))

    async def count_likes(self, db: AsyncSession, review_id: int) -> LikeCountResponse:
        return LikeCountResponse(likes=await self._repo.count_likes(db, review_id))

    async def has_like(
        self, db: AsyncSession, review_id: int, user_id: str
    ) -> LikeExistsResponse:
        return LikeExistsResponse(exists=await self._repo.has_like(db, review_id, user_id))

    async def create_review(
        self,
        db: AsyncSession,
        body: CreateGeneralReviewRequest,
        invalidator: CacheInvalidator,
    ) -> GeneralReviewOut:
        try:
            if not await self._repo.restaurant_exists(db, body.restaurant_id):
                raise RestaurantNotFoundError(body.restaurant_id)
            review = await self._repo.create_review(
                db, body.user_id, body.restaurant_id, body.rating, body.text, body.anonymous
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await invalidator.invalidate(
            db,
            MutationEvent(
                kind=MutationType.GENERAL_REVIEW_CREATED,
                review_id=review.id,
                restaurant_id=review.restaurant_id,
            ),
        )
        return GeneralReviewOut.from_domain(review)

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

        await invalidator.invalidate(
            db,
            MutationEvent(
                kind=MutationType.GENERAL_REVIEW_DELETED,
                review_id=review_id,
                restaurant_id=review.restaurant_id,
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
                kind=MutationType.GENERAL_REVIEW_LIKE_TOGGLED,
                review_id=review_id,
                restaurant_id=review.restaurant_id,
            ),
        )
        return ToggleLikeResponse(likes=likes, liked=liked)

    async def report_review(self, db: AsyncSession, body: ReportRequest) -> ReportResponse:
        """File a moderation report. Reports are not served by any cached read."""
        if body.general_review_id is None:
            raise MissingFieldError("General review ID is required")
        if not body.user_id:
            raise UserIdRequiredError()

        try:
            await self._get_or_raise(db, body.general_review_id)
            report = await self._repo.create_report(
                db, body.general_review_id, body.user_id, body.reason
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return ReportResponse(report=ReportOut.from_domain(report))

    async def _get_or_raise(self, db: AsyncSession, review_id: int) -> GeneralReview:
        review = await self._repo.get_review(db, review_id)
        if review is None:
            raise GeneralReviewNotFoundError(review_id)
        return review
