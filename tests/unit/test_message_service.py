# tests/unit/test_message_service.py
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pb_common.errors import MessageNotFoundError, MissingFieldError
from src.pb_message.application.schemas import CreateMessageRequest
from src.pb_message.application.service import MessageApplicationService
from src.pb_message.domain.models import Message


@pytest.fixture
def db():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def mock_repo():
    return MagicMock()


class TestCreateMessage:
    @pytest.mark.asyncio
    async def test_subject_and_message_required(self, db, mock_repo):
        svc = MessageApplicationService(repo=mock_repo)
        with pytest.raises(MissingFieldError):
            await svc.create_message(db, CreateMessageRequest(subject="Hi"))

    @pytest.mark.asyncio
    async def test_guest_message(self, db, mock_repo):
        mock_repo.create_message = AsyncMock(return_value=Message(
            id=1, profile_id=None, subject="Menu", message="Add more vegan options",
            created_at=datetime.now(UTC),
        ))
        svc = MessageApplicationService(repo=mock_repo)

        resp = await svc.create_message(
            db, CreateMessageRequest(profile_id=0, subject="Menu", message="Add more vegan options")
        )

        assert resp.success is True
        assert resp.message == "Message submitted successfully"
        assert resp.data.id == 1
        mock_repo.create_message.assert_awaited_once_with(
            db, None, "Menu", "Add more vegan options"
        )
        db.commit.assert_awaited_once()


class TestGetMessage:
    @pytest.mark.asyncio
    async def test_not_found(self, db, mock_repo):
        mock_repo.get_message = AsyncMock(return_value=None)
        svc = MessageApplicationService(repo=mock_repo)
        with pytest.raises(MessageNotFoundError):
            await svc.get_message(db, 8)

    @pytest.mark.asyncio
    async def test_includes_sender_name(self, db, mock_repo):
        mock_repo.get_message = AsyncMock(return_value=Message(
            id=8, profile_id=12, subject="s", message="m", created_at=None, user_name="Eater",
        ))
        svc = MessageApplicationService(repo=mock_repo)

        msg = await svc.get_message(db, 8)

        assert msg.user_name == "Eater"
