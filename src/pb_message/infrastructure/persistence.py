"""MessageRepository — contact-form messages, optionally tied to a profile."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_message.domain.models import Message

_INSERT_MESSAGE_SQL = text("""
    INSERT INTO messages (profile_id, subject, message)
    VALUES (:profile_id, :subject, :message)
    RETURNING id, profile_id, subject, message, created_at
""")

_SELECT_WITH_SENDER = """
    SELECT m.id, m.profile_id, m.subject, m.message, m.created_at,
           p.name AS user_name
    FROM messages m
    LEFT JOIN profiles p ON m.profile_id = p.id
"""

_LIST_MESSAGES_SQL = text(_SELECT_WITH_SENDER + " ORDER BY m.created_at DESC")
_GET_MESSAGE_SQL = text(_SELECT_WITH_SENDER + " WHERE m.id = :message_id")


def _row_to_message(row: Any, with_sender: bool = True) -> Message:
    return Message(
        id=row.id,
        profile_id=row.profile_id,
        subject=row.subject,
        message=row.message,
        created_at=row.created_at,
        user_name=row.user_name if with_sender else None,
    )


class MessageRepository:
    async def create_message(
        self, db: AsyncSession, profile_id: int | None, subject: str, message: str
    ) -> Message:
        row = (
            await db.execute(
                _INSERT_MESSAGE_SQL,
                {"profile_id": profile_id, "subject": subject, "message": message},
            )
        ).fetchone()
        return _row_to_message(row, with_sender=False)

    async def list_messages(self, db: AsyncSession) -> list[Message]:
        rows = (await db.execute(_LIST_MESSAGES_SQL)).fetchall()
        return [_row_to_message(row) for row in rows]

    async def get_message(self, db: AsyncSession, message_id: int) -> Message | None:
        row = (await db.execute(_GET_MESSAGE_SQL, {"message_id": message_id})).fetchone()
        return _row_to_message(row) if row else None
