# src/tingling/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .call_log import CallLogCreate, CallLogResponse
from .chat import (
    ChangedResponse,
    ChatOpen,
    ChatResponse,
    MarkRead,
    MessageCreate,
    MessageResponse,
)
from .relationship import (
    BlockCreate,
    BlockedUserResponse,
    FriendRequestCreate,
    FriendRequestRespond,
    FriendRequestResponse,
    UnblockResponse,
)
from .status import StatusCreate, StatusResponse, StatusViewCreate, StatusViewResponse
from .user import SessionRequest, SessionResponse, UserCreate, UserResponse, UserUpdate

__all__ = [
    "CallLogCreate", "CallLogResponse",
    "ChangedResponse", "ChatOpen", "ChatResponse", "MarkRead",
    "MessageCreate", "MessageResponse",
    "BlockCreate", "BlockedUserResponse", "FriendRequestCreate",
    "FriendRequestRespond", "FriendRequestResponse", "UnblockResponse",
    "StatusCreate", "StatusResponse", "StatusViewCreate", "StatusViewResponse",
    "SessionRequest", "SessionResponse", "UserCreate", "UserResponse", "UserUpdate",
]
