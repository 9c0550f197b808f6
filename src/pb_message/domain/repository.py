# src/pb_message/domain/repository.py
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_message.domain.models import Message


class MessageRepositoryProtocol(Protocol):
    async def create_message(
        self, db: AsyncSession, profile_id: int | None, subject: str, message: str
    ) -> Message: ...

    async def list_messages(self, db: AsyncSession) -> list[Message]: ...

    async def get_message(self, db: AsyncSession, message_id: int) -> Message | None: ...
