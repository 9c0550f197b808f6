"""MessageApplicationService — contact messages. Nothing here is cached."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_common.errors import MessageNotFoundError, MissingFieldError
from src.pb_message.application.schemas import (
    CreateMessageRequest,
    CreateMessageResponse,
    MessageOut,
    MessageWithSender,
)
from src.pb_message.domain.repository import MessageRepositoryProtocol
from src.pb_message.infrastructure.persistence import MessageRepository


class MessageApplicationService:
    def __init__(self, repo: MessageRepositoryProtocol | None = None) -> None:
        self._repo: MessageRepositoryProtocol = repo or MessageRepository()

    async def create_message(
        self, db: AsyncSession, body: CreateMessageRequest
    ) -> CreateMessageResponse:
        if not body.subject or not body.message:
            raise MissingFieldError("Subject and message are required")

        try:
            # profile_id is optional; guests submit anonymously
            message = await self._repo.create_message(
                db, body.profile_id or None, body.subject, body.message
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return CreateMessageResponse(data=MessageOut.from_domain(message))

    async def list_messages(self, db: AsyncSession) -> list[MessageWithSender]:
        return [MessageWithSender.from_domain(m) for m in await self._repo.list_messages(db)]

    async def get_message(self, db: AsyncSession, message_id: int) -> MessageWithSender:
        message = await self._repo.get_message(db, message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        return MessageWithSender.from_domain(message)
