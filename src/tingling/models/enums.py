"""Closed value sets shared by the ORM models and the API schemas."""

from __future__ import annotations

import enum

from sqlalchemy import Enum as SAEnum


class CallStatus(str, enum.Enum):
    """Presence of a user as shown to their contacts."""

    ONLINE = "online"
    OFFLINE = "offline"
    IN_CALL = "in_call"


class FriendRequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class MessageType(str, enum.Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


class CallType(str, enum.Enum):
    AUDIO = "audio"
    VIDEO = "video"


class CallOutcome(str, enum.Enum):
    """How a logged call ended."""

    COMPLETED = "completed"
    MISSED = "missed"
    REJECTED = "rejected"


class MediaType(str, enum.Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class Privacy(str, enum.Enum):
    PUBLIC = "public"
    FRIENDS_ONLY = "friends_only"


def db_enum(enum_cls: type[enum.Enum], name: str) -> SAEnum:
    """Column type persisting an enum by its value under a named database type."""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
