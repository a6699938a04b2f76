# src/tingling/models/__init__.py
"""SQLAlchemy models for the Tingling application."""

from .call_log import CallLog
from .chat import Chat, ChatParticipant, Message
from .enums import (
    CallOutcome,
    CallStatus,
    CallType,
    FriendRequestStatus,
    MediaType,
    MessageType,
    Privacy,
)
from .relationship import BlockedUser, FriendRequest, Friendship
from .status import Status, StatusView
from .user import User

__all__ = [
    "CallLog",
    "Chat", "ChatParticipant", "Message",
    "CallOutcome", "CallStatus", "CallType", "FriendRequestStatus",
    "MediaType", "MessageType", "Privacy",
    "BlockedUser", "FriendRequest", "Friendship",
    "Status", "StatusView",
    "User",
]
