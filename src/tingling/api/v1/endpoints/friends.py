"""Friend request, friendship and block endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from tingling.api.v1.dependencies import SessionDep
from tingling.models import FriendRequestStatus
from tingling.schemas.relationship import (
    BlockCreate,
    BlockedUserResponse,
    FriendRequestCreate,
    FriendRequestRespond,
    FriendRequestResponse,
    UnblockResponse,
)
from tingling.schemas.user import UserResponse
from tingling.services import friend_service

router = APIRouter(tags=["friends"])


@router.post(
    "/friend-requests",
    response_model=FriendRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_friend_request(request: FriendRequestCreate, db: SessionDep) -> FriendRequestResponse:
    """Send a friend request; refused for blocked pairs, friends and repeat requests."""
    friend_request = friend_service.send_friend_request(db, request.sender_id, request.receiver_id)
    return FriendRequestResponse.model_validate(friend_request)


@router.post("/friend-requests/{request_id}/respond", response_model=FriendRequestResponse)
async def respond_to_friend_request(
    request_id: int,
    response: FriendRequestRespond,
    db: SessionDep,
) -> FriendRequestResponse:
    friend_request = friend_service.respond_to_friend_request(
        db, request_id, FriendRequestStatus(response.status)
    )
    return FriendRequestResponse.model_validate(friend_request)


@router.get("/users/{user_id}/friend-requests", response_model=list[FriendRequestResponse])
async def list_friend_requests(user_id: str, db: SessionDep) -> list[FriendRequestResponse]:
    """Pending requests the user has received."""
    requests = friend_service.get_friend_requests(db, user_id)
    return [FriendRequestResponse.model_validate(r) for r in requests]


@router.get("/users/{user_id}/friends", response_model=list[UserResponse])
async def list_friends(user_id: str, db: SessionDep) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in friend_service.get_friends(db, user_id)]


@router.post("/blocks", response_model=BlockedUserResponse, status_code=status.HTTP_201_CREATED)
async def block_user(block: BlockCreate, db: SessionDep) -> BlockedUserResponse:
    """Block a user, ending any friendship between the two."""
    blocked = friend_service.block_user(db, block.blocker_id, block.blocked_id)
    return BlockedUserResponse.model_validate(blocked)


@router.delete("/blocks/{blocker_id}/{blocked_id}", response_model=UnblockResponse)
async def unblock_user(blocker_id: str, blocked_id: str, db: SessionDep) -> UnblockResponse:
    return UnblockResponse(removed=friend_service.unblock_user(db, blocker_id, blocked_id))
