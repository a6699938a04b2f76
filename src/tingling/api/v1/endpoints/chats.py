"""Chat and message endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from tingling.api.v1.dependencies import SessionDep
from tingling.core.settings import settings
from tingling.schemas.chat import (
    ChangedResponse,
    ChatOpen,
    ChatResponse,
    MarkRead,
    MessageCreate,
    MessageResponse,
)
from tingling.services import chat_service

router = APIRouter(tags=["chats"])


@router.post("/chats", response_model=ChatResponse)
async def open_chat(chat: ChatOpen, db: SessionDep) -> ChatResponse:
    """Return the chat between two users, creating it on first contact."""
    db_chat = chat_service.get_or_create_chat(db, chat.user1_id, chat.user2_id)
    return ChatResponse.model_validate(db_chat)


@router.get("/users/{user_id}/chats", response_model=list[ChatResponse])
async def list_user_chats(user_id: str, db: SessionDep) -> list[ChatResponse]:
    return [ChatResponse.model_validate(c) for c in chat_service.get_user_chats(db, user_id)]


@router.post(
    "/chats/{chat_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(chat_id: int, message: MessageCreate, db: SessionDep) -> MessageResponse:
    db_message = chat_service.send_message(
        db,
        chat_id,
        message.sender_id,
        message.content,
        message.message_type,
    )
    return MessageResponse.model_validate(db_message)


@router.get("/chats/{chat_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    chat_id: int,
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=settings.message_page_max),
    offset: int | None = Query(None, ge=0),
) -> list[MessageResponse]:
    """Messages in chronological order, deleted ones flagged rather than hidden."""
    messages = chat_service.get_chat_messages(db, chat_id, limit=limit, offset=offset)
    return [MessageResponse.model_validate(m) for m in messages]


@router.delete("/messages/{message_id}", response_model=ChangedResponse)
async def delete_message(
    message_id: int,
    db: SessionDep,
    user_id: str = Query(..., min_length=1, description="Requesting user; must be the sender"),
) -> ChangedResponse:
    return ChangedResponse(changed=chat_service.delete_message(db, message_id, user_id))


@router.post("/chats/{chat_id}/read", response_model=ChangedResponse)
async def mark_chat_read(chat_id: int, body: MarkRead, db: SessionDep) -> ChangedResponse:
    return ChangedResponse(changed=chat_service.mark_messages_as_read(db, chat_id, body.user_id))
