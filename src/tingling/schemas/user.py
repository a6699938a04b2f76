"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tingling.db.time import UTCDateTime
from tingling.models.enums import CallStatus


class UserCreate(BaseModel):
    """Profile data captured on first sign-in."""

    external_auth_id: str = Field(..., min_length=1, description="Identifier issued by the external auth provider")
    name: str = Field(..., min_length=1, max_length=100)
    emoji: str = Field(..., min_length=1, max_length=16, description="Emoji avatar")
    profile_picture_url: str | None = Field(None, description="Optional picture URL")


class UserUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=100)
    emoji: str | None = Field(None, min_length=1, max_length=16)
    profile_picture_url: str | None = None
    call_status: CallStatus | None = None


class UserResponse(BaseModel):
    """Schema for user information returned by the API."""

    id: str
    external_auth_id: str
    name: str
    emoji: str
    profile_picture_url: str | None
    call_status: CallStatus
    created_at: UTCDateTime
    updated_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)


class SessionRequest(BaseModel):
    """Credential presented to establish a session.

    ``name`` and ``emoji`` are only used when the sign-in creates the account.
    """

    credential: str = Field(..., min_length=1, description="Verified credential from the external provider")
    name: str | None = Field(None, min_length=1, max_length=100)
    emoji: str | None = Field(None, min_length=1, max_length=16)
    profile_picture_url: str | None = None


class SessionResponse(BaseModel):
    """Access token and the user it was issued for."""

    access_token: str
    token_type: str = "bearer"
    created: bool = Field(..., description="True if the sign-in created the account")
    user: UserResponse
