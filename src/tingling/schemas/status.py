"""Status and status-view schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tingling.db.time import UTCDateTime
from tingling.models.enums import MediaType, Privacy


class StatusCreate(BaseModel):
    """New status; the expiry is assigned by the server."""

    user_id: str = Field(..., min_length=1)
    content: str | None = None
    media_url: str | None = None
    media_type: MediaType = MediaType.TEXT
    privacy: Privacy = Privacy.FRIENDS_ONLY


class StatusResponse(BaseModel):
    id: int
    user_id: str
    content: str | None
    media_url: str | None
    media_type: MediaType
    privacy: Privacy
    expires_at: UTCDateTime
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class StatusViewCreate(BaseModel):
    viewer_id: str = Field(..., min_length=1)


class StatusViewResponse(BaseModel):
    id: int
    status_id: int
    viewer_id: str
    viewed_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)
