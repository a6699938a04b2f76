"""Friend request lifecycle, friendship lookups and blocking.

Friendships and requests are stored in the order they were created, so every
lookup below checks both orderings of a pair.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tingling.db.time import utcnow
from tingling.models import (
    BlockedUser,
    FriendRequest,
    FriendRequestStatus,
    Friendship,
    User,
)
from tingling.services.errors import ConflictError, InvalidOperationError, NotFoundError
from tingling.services.pairs import either_order, friend_ids

__all__ = [
    "are_friends",
    "is_blocked",
    "send_friend_request",
    "respond_to_friend_request",
    "get_friend_requests",
    "get_friends",
    "block_user",
    "unblock_user",
]

logger = logging.getLogger(__name__)


def are_friends(db: Session, user_a: str, user_b: str) -> bool:
    """Return True if a friendship row links the two users in either order."""
    stmt = select(Friendship.id).where(
        either_order(Friendship.user1_id, Friendship.user2_id, user_a, user_b)
    )
    return db.execute(stmt.limit(1)).first() is not None


def is_blocked(db: Session, user_a: str, user_b: str) -> bool:
    """Return True if either user has blocked the other."""
    stmt = select(BlockedUser.id).where(
        either_order(BlockedUser.blocker_id, BlockedUser.blocked_id, user_a, user_b)
    )
    return db.execute(stmt.limit(1)).first() is not None


def _find_request(db: Session, user_a: str, user_b: str) -> FriendRequest | None:
    return (
        db.query(FriendRequest)
        .filter(either_order(FriendRequest.sender_id, FriendRequest.receiver_id, user_a, user_b))
        .first()
    )


def send_friend_request(db: Session, sender_id: str, receiver_id: str) -> FriendRequest:
    """Create a pending request after checking existence, blocks and history.

    Any earlier request between the pair, whatever its status, prevents a new
    one. A rejected request therefore locks the pair out.

    Raises:
        InvalidOperationError: If the sender targets themselves.
        NotFoundError: If either user does not exist.
        ConflictError: If the pair is blocked, already friends, or has a request.
    """
    if sender_id == receiver_id:
        raise InvalidOperationError("Cannot send a friend request to yourself")

    existing_users = (
        db.query(func.count(User.id))
        .filter(User.id.in_([sender_id, receiver_id]))
        .scalar()
    )
    if existing_users != 2:
        raise NotFoundError("One or both users do not exist")

    if is_blocked(db, sender_id, receiver_id):
        raise ConflictError("Cannot send friend request to blocked user")

    if are_friends(db, sender_id, receiver_id):
        raise ConflictError("Users are already friends")

    if _find_request(db, sender_id, receiver_id) is not None:
        raise ConflictError("Friend request already exists")

    friend_request = FriendRequest(
        sender_id=sender_id,
        receiver_id=receiver_id,
        status=FriendRequestStatus.PENDING,
    )
    db.add(friend_request)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # A concurrent request for the same pair was committed first.
        if _find_request(db, sender_id, receiver_id) is not None:
            raise ConflictError("Friend request already exists") from None
        raise
    db.refresh(friend_request)
    logger.info("Friend request %s sent from %s to %s", friend_request.id, sender_id, receiver_id)
    return friend_request


def respond_to_friend_request(
    db: Session,
    request_id: int,
    decision: FriendRequestStatus,
) -> FriendRequest:
    """Accept or reject a pending request.

    Accepting inserts the friendship in the request's (sender, receiver) order
    within the same commit as the status change.

    Raises:
        InvalidOperationError: If ``decision`` is not accepted or rejected.
        NotFoundError: If the request does not exist.
        ConflictError: If the request was already answered.
    """
    decision = FriendRequestStatus(decision)
    if decision is FriendRequestStatus.PENDING:
        raise InvalidOperationError("A response must accept or reject the request")

    friend_request = db.get(FriendRequest, request_id)
    if friend_request is None:
        raise NotFoundError("Friend request not found")

    if friend_request.status is not FriendRequestStatus.PENDING:
        raise ConflictError("Friend request has already been responded to")

    friend_request.status = decision
    friend_request.updated_at = utcnow()

    if decision is FriendRequestStatus.ACCEPTED:
        db.add(
            Friendship(
                user1_id=friend_request.sender_id,
                user2_id=friend_request.receiver_id,
            )
        )

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.error("Could not record response to friend request %s", request_id)
        raise
    db.refresh(friend_request)
    logger.info("Friend request %s %s", request_id, decision.value)
    return friend_request


def get_friend_requests(db: Session, user_id: str) -> Sequence[FriendRequest]:
    """Return pending requests addressed to ``user_id``, newest first."""
    return (
        db.query(FriendRequest)
        .filter(
            FriendRequest.receiver_id == user_id,
            FriendRequest.status == FriendRequestStatus.PENDING,
        )
        .order_by(FriendRequest.created_at.desc(), FriendRequest.id.desc())
        .all()
    )


def get_friends(db: Session, user_id: str) -> Sequence[User]:
    """Return every user sharing a friendship with ``user_id``, without duplicates."""
    return (
        db.query(User)
        .filter(User.id.in_(friend_ids(user_id)))
        .order_by(User.name, User.id)
        .all()
    )


def block_user(db: Session, blocker_id: str, blocked_id: str) -> BlockedUser:
    """Drop any friendship between the pair and record the block.

    Pending friend requests are left as they are. Blocking an already blocked
    user returns the existing row.

    Raises:
        InvalidOperationError: If a user tries to block themselves.
        IntegrityError: If either user does not exist.
    """
    if blocker_id == blocked_id:
        raise InvalidOperationError("Cannot block yourself")

    existing = (
        db.query(BlockedUser)
        .filter(BlockedUser.blocker_id == blocker_id, BlockedUser.blocked_id == blocked_id)
        .first()
    )

    db.execute(
        delete(Friendship).where(
            either_order(Friendship.user1_id, Friendship.user2_id, blocker_id, blocked_id)
        )
    )

    if existing is not None:
        db.commit()
        return existing

    block = BlockedUser(blocker_id=blocker_id, blocked_id=blocked_id)
    db.add(block)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Block from %s to %s rejected by the database", blocker_id, blocked_id)
        raise
    db.refresh(block)
    logger.info("User %s blocked %s", blocker_id, blocked_id)
    return block


def unblock_user(db: Session, blocker_id: str, blocked_id: str) -> bool:
    """Remove a block; return whether a row was deleted."""
    result = db.execute(
        delete(BlockedUser).where(
            BlockedUser.blocker_id == blocker_id,
            BlockedUser.blocked_id == blocked_id,
        )
    )
    db.commit()
    removed = result.rowcount > 0
    if removed:
        logger.info("User %s unblocked %s", blocker_id, blocked_id)
    return removed
