"""Call log schemas."""

from pydantic import BaseModel, ConfigDict, Field

from tingling.db.time import UTCDateTime
from tingling.models.enums import CallOutcome, CallType


class CallLogCreate(BaseModel):
    caller_id: str = Field(..., min_length=1)
    receiver_id: str = Field(..., min_length=1)
    call_type: CallType
    status: CallOutcome
    duration: int | None = Field(None, ge=0, description="Length in seconds; null when the call never connected")


class CallLogResponse(BaseModel):
    id: int
    caller_id: str
    receiver_id: str
    call_type: CallType
    status: CallOutcome
    duration: int | None
    created_at: UTCDateTime

    model_config = ConfigDict(from_attributes=True)
