"""pb_message REST endpoints (/messages)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.pb_common.database import get_db_session
from src.pb_message.application.schemas import (
    CreateMessageRequest,
    CreateMessageResponse,
    MessageWithSender,
)
from src.pb_message.application.service import MessageApplicationService

router = APIRouter(prefix="/messages", tags=["messages"])

_service = MessageApplicationService()


@router.post("", response_model=CreateMessageResponse, status_code=201)
async def create_message(
    body: CreateMessageRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> CreateMessageResponse:
    return await _service.create_message(db, body)


@router.get("", response_model=list[MessageWithSender])
async def list_messages(
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> list[MessageWithSender]:
    return await _service.list_messages(db)


@router.get("/{message_id}", response_model=MessageWithSender)
async def get_message(
    message_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> MessageWithSender:
    return await _service.get_message(db, message_id)
