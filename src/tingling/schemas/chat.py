"""Chat and message schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tingling.db.time import UTCDateTime
from tingling.models.enums import MessageType


class ChatOpen(BaseModel):
    """Pair of users whose chat should be returned or created."""

    user1_id: str = Field(..., min_length=1)
    user2_id: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    id: int
    user1_id: str
    user2_id: str
    last_message_id: int | None
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class MessageCreate(BaseModel):
    sender_id: str = Field(..., min_length=1)
    content: str = Field(..., description="Text body or media URL")
    message_type: MessageType = MessageType.TEXT


class MessageResponse(BaseModel):
    id: int
    chat_id: int
    sender_id: str
    content: str
    message_type: MessageType
    is_deleted: bool
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class MarkRead(BaseModel):
    user_id: str = Field(..., min_length=1)


class ChangedResponse(BaseModel):
    """Boolean outcome of an operation whose no-op case is not an error."""

    changed: bool
