"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from tingling.api.v1.dependencies import SessionDep
from tingling.schemas.user import UserCreate, UserResponse, UserUpdate
from tingling.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, db: SessionDep) -> UserResponse:
    db_user = user_service.create_user(db, user)
    return UserResponse.model_validate(db_user)


@router.get("/search", response_model=list[UserResponse])
async def search_users(
    db: SessionDep,
    q: str = Query("", description="Exact user id or part of a display name"),
) -> list[UserResponse]:
    """Search users by id or name. A blank query matches nobody."""
    return [UserResponse.model_validate(u) for u in user_service.search_users(db, q)]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: SessionDep) -> UserResponse:
    db_user = user_service.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(db_user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, update: UserUpdate, db: SessionDep) -> UserResponse:
    """Change the provided profile fields only."""
    db_user = user_service.update_user(db, user_id, update)
    return UserResponse.model_validate(db_user)
