"""Lookup Protocol used to resolve parent ids before building eviction keys.

Mutation payloads usually carry only a leaf id (a review id, a food id).
Unit tests inject a mock that conforms to this Protocol.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


class EntityLookupProtocol(Protocol):
    async def restaurant_id_for_food(
        self, db: AsyncSession, food_id: int
    ) -> int | None: ...

    async def food_id_for_food_review(
        self, db: AsyncSession, review_id: int
    ) -> int | None: ...

    async def restaurant_id_for_general_review(
        self, db: AsyncSession, review_id: int
    ) -> int | None: ...
