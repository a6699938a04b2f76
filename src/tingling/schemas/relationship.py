"""Schemas for friend requests, friendships and blocks."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from tingling.db.time import UTCDateTime
from tingling.models.enums import FriendRequestStatus


class FriendRequestCreate(BaseModel):
    sender_id: str = Field(..., min_length=1)
    receiver_id: str = Field(..., min_length=1)


class FriendRequestRespond(BaseModel):
    """Decision on a pending request."""

    status: Literal["accepted", "rejected"]


class FriendRequestResponse(BaseModel):
    id: int
    sender_id: str
    receiver_id: str
    status: FriendRequestStatus
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class BlockCreate(BaseModel):
    blocker_id: str = Field(..., min_length=1)
    blocked_id: str = Field(..., min_length=1)


class BlockedUserResponse(BaseModel):
    id: int
    blocker_id: str
    blocked_id: str
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class UnblockResponse(BaseModel):
    """Whether an existing block was removed."""

    removed: bool
