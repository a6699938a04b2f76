"""Call history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from tingling.api.v1.dependencies import SessionDep
from tingling.schemas.call_log import CallLogCreate, CallLogResponse
from tingling.services import call_service

router = APIRouter(tags=["calls"])


@router.post("/call-logs", response_model=CallLogResponse, status_code=status.HTTP_201_CREATED)
async def log_call(call: CallLogCreate, db: SessionDep) -> CallLogResponse:
    entry = call_service.log_call(
        db,
        call.caller_id,
        call.receiver_id,
        call.call_type,
        call.status,
        call.duration,
    )
    return CallLogResponse.model_validate(entry)


@router.get("/users/{user_id}/call-logs", response_model=list[CallLogResponse])
async def list_call_logs(user_id: str, db: SessionDep) -> list[CallLogResponse]:
    """Calls placed or received by the user, newest first."""
    return [CallLogResponse.model_validate(c) for c in call_service.get_call_logs(db, user_id)]
