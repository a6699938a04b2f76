"""Status endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from tingling.api.v1.dependencies import SessionDep
from tingling.schemas.status import (
    StatusCreate,
    StatusResponse,
    StatusViewCreate,
    StatusViewResponse,
)
from tingling.services import status_service

router = APIRouter(tags=["statuses"])


@router.post("/statuses", response_model=StatusResponse, status_code=status.HTTP_201_CREATED)
async def create_status(payload: StatusCreate, db: SessionDep) -> StatusResponse:
    """Publish a status that stays visible for 24 hours."""
    item = status_service.create_status(
        db,
        payload.user_id,
        content=payload.content,
        media_url=payload.media_url,
        media_type=payload.media_type,
        privacy=payload.privacy,
    )
    return StatusResponse.model_validate(item)


@router.get("/users/{user_id}/statuses", response_model=list[StatusResponse])
async def list_user_statuses(
    user_id: str,
    db: SessionDep,
    viewer_id: str = Query(..., min_length=1, description="User the list is filtered for"),
) -> list[StatusResponse]:
    items = status_service.get_user_statuses(db, user_id, viewer_id)
    return [StatusResponse.model_validate(s) for s in items]


@router.get("/users/{user_id}/friends/statuses", response_model=list[StatusResponse])
async def list_friends_statuses(user_id: str, db: SessionDep) -> list[StatusResponse]:
    items = status_service.get_friends_statuses(db, user_id)
    return [StatusResponse.model_validate(s) for s in items]


@router.post("/statuses/{status_id}/views", response_model=StatusViewResponse)
async def mark_status_viewed(
    status_id: int,
    view: StatusViewCreate,
    db: SessionDep,
) -> StatusViewResponse:
    """Record a view; repeating it returns the original record."""
    record = status_service.mark_status_viewed(db, status_id, view.viewer_id)
    return StatusViewResponse.model_validate(record)
