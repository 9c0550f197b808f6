# src/pb_message/application/schemas.py
from datetime import datetime

from pydantic import BaseModel

from src.pb_message.domain.models import Message


class CreateMessageRequest(BaseModel):
    profile_id: int | None = None
    subject: str | None = None
    message: str | None = None


class MessageOut(BaseModel):
    id: int
    profile_id: int | None
    subject: str
    message: str
    created_at: datetime | None

    @classmethod
    def from_domain(cls, m: Message) -> "MessageOut":
        return cls(
            id=m.id,
            profile_id=m.profile_id,
            subject=m.subject,
            message=m.message,
            created_at=m.created_at,
        )


class MessageWithSender(MessageOut):
    user_name: str | None

    @classmethod
    def from_domain(cls, m: Message) -> "MessageWithSender":
        return cls(
            id=m.id,
            profile_id=m.profile_id,
            subject=m.subject,
            message=m.message,
            created_at=m.created_at,
            user_name=m.user_name,
        )


class CreateMessageResponse(BaseModel):
    success: bool = True
    message: str = "Message submitted successfully"
    data: MessageOut
