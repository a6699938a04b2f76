"""One-to-one chats, messages and unread bookkeeping."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tingling.core.settings import settings
from tingling.db.time import utcnow
from tingling.models import Chat, ChatParticipant, Message, MessageType
from tingling.services.errors import InvalidOperationError
from tingling.services.pairs import either_order

__all__ = [
    "get_or_create_chat",
    "get_chat_participant",
    "send_message",
    "get_chat_messages",
    "delete_message",
    "mark_messages_as_read",
    "get_user_chats",
]

logger = logging.getLogger(__name__)


def _find_chat(db: Session, user_a: str, user_b: str) -> Chat | None:
    return (
        db.query(Chat)
        .filter(either_order(Chat.user1_id, Chat.user2_id, user_a, user_b))
        .first()
    )


def get_or_create_chat(db: Session, user1_id: str, user2_id: str) -> Chat:
    """Return the pair's chat, creating it with both participants if absent.

    The lookup ignores argument order, so ``(a, b)`` and ``(b, a)`` resolve to
    the same chat.

    Raises:
        InvalidOperationError: If both ids are the same user.
        IntegrityError: If either user does not exist.
    """
    if user1_id == user2_id:
        raise InvalidOperationError("Cannot open a chat with yourself")

    chat = _find_chat(db, user1_id, user2_id)
    if chat is not None:
        return chat

    chat = Chat(user1_id=user1_id, user2_id=user2_id)
    db.add(chat)
    try:
        db.flush()
        db.add_all(
            [
                ChatParticipant(chat_id=chat.id, user_id=user1_id),
                ChatParticipant(chat_id=chat.id, user_id=user2_id),
            ]
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        # A concurrent request may have opened the same chat in either order.
        existing = _find_chat(db, user1_id, user2_id)
        if existing is not None:
            return existing
        logger.warning("Chat creation between %s and %s failed", user1_id, user2_id)
        raise
    db.refresh(chat)
    logger.info("Opened chat %s between %s and %s", chat.id, user1_id, user2_id)
    return chat


def get_chat_participant(db: Session, chat_id: int, user_id: str) -> ChatParticipant | None:
    """Return one user's bookkeeping row for a chat, or None if they are not in it."""
    return (
        db.query(ChatParticipant)
        .filter(ChatParticipant.chat_id == chat_id, ChatParticipant.user_id == user_id)
        .first()
    )


def send_message(
    db: Session,
    chat_id: int,
    sender_id: str,
    content: str,
    message_type: MessageType = MessageType.TEXT,
) -> Message:
    """Append a message and update the chat summary in a single transaction.

    Every participant other than the sender has their unread count bumped by
    one. Any failure rolls back the message as well.

    Raises:
        IntegrityError: If the chat or the sender does not exist.
    """
    message = Message(
        chat_id=chat_id,
        sender_id=sender_id,
        content=content,
        message_type=MessageType(message_type),
    )
    db.add(message)
    try:
        db.flush()

        now = utcnow()
        db.execute(
            update(Chat)
            .where(Chat.id == chat_id)
            .values(last_message_id=message.id, updated_at=now)
        )
        db.execute(
            update(ChatParticipant)
            .where(
                ChatParticipant.chat_id == chat_id,
                ChatParticipant.user_id != sender_id,
            )
            .values(unread_count=ChatParticipant.unread_count + 1)
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Message from %s to chat %s rejected", sender_id, chat_id)
        raise
    db.refresh(message)
    logger.debug("Message %s posted to chat %s", message.id, chat_id)
    return message


def get_chat_messages(
    db: Session,
    chat_id: int,
    limit: int | None = None,
    offset: int | None = None,
) -> Sequence[Message]:
    """Return messages oldest first, soft-deleted ones included.

    ``limit`` is capped at ``settings.message_page_max``.
    """
    query = (
        db.query(Message)
        .filter(Message.chat_id == chat_id)
        .order_by(Message.created_at.asc(), Message.id.asc())
    )
    if offset:
        query = query.offset(offset)
    if limit is not None:
        query = query.limit(min(limit, settings.message_page_max))
    return query.all()


def delete_message(db: Session, message_id: int, user_id: str) -> bool:
    """Soft delete a message; only its sender may do so.

    Returns False when no message with that id belongs to ``user_id``.
    Deleting an already deleted message still reports True.
    """
    result = db.execute(
        update(Message)
        .where(Message.id == message_id, Message.sender_id == user_id)
        .values(is_deleted=True, updated_at=utcnow())
    )
    db.commit()
    return result.rowcount > 0


def mark_messages_as_read(db: Session, chat_id: int, user_id: str) -> bool:
    """Reset the user's unread count in a chat and stamp ``last_read_at``."""
    result = db.execute(
        update(ChatParticipant)
        .where(ChatParticipant.chat_id == chat_id, ChatParticipant.user_id == user_id)
        .values(unread_count=0, last_read_at=utcnow())
    )
    db.commit()
    return result.rowcount > 0


def get_user_chats(db: Session, user_id: str) -> Sequence[Chat]:
    """Return chats the user belongs to, most recently active first."""
    return (
        db.query(Chat)
        .filter(or_(Chat.user1_id == user_id, Chat.user2_id == user_id))
        .order_by(Chat.updated_at.desc(), Chat.id.desc())
        .all()
    )
