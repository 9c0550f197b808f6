"""Domain models for pb_message."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Message:
    id: int
    profile_id: int | None
    subject: str
    message: str
    created_at: datetime | None
    user_name: str | None = None
