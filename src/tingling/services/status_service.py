"""Ephemeral statuses, their visibility rules and view receipts.

A status is visible while ``expires_at`` lies in the future. Nothing deletes
expired rows; every read filters them out instead.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tingling.db.time import utcnow
from tingling.models import MediaType, Privacy, Status, StatusView
from tingling.models.status import STATUS_LIFETIME
from tingling.services.errors import NotFoundError
from tingling.services.friend_service import are_friends
from tingling.services.pairs import friend_ids

__all__ = [
    "create_status",
    "get_user_statuses",
    "get_friends_statuses",
    "mark_status_viewed",
]

logger = logging.getLogger(__name__)


def create_status(
    db: Session,
    user_id: str,
    content: str | None = None,
    media_url: str | None = None,
    media_type: MediaType = MediaType.TEXT,
    privacy: Privacy = Privacy.FRIENDS_ONLY,
) -> Status:
    """Publish a status that expires ``STATUS_LIFETIME`` after creation."""
    now = utcnow()
    item = Status(
        user_id=user_id,
        content=content,
        media_url=media_url,
        media_type=MediaType(media_type),
        privacy=Privacy(privacy),
        created_at=now,
        expires_at=now + STATUS_LIFETIME,
    )
    db.add(item)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Status for %s rejected", user_id)
        raise
    db.refresh(item)
    logger.info("User %s posted status %s", user_id, item.id)
    return item


def get_user_statuses(db: Session, owner_id: str, viewer_id: str) -> Sequence[Status]:
    """Return the owner's live statuses that ``viewer_id`` may see.

    Owners see everything, friends see public and friends-only statuses, and
    anyone else sees public ones only.
    """
    query = db.query(Status).filter(
        Status.user_id == owner_id,
        Status.expires_at > utcnow(),
    )
    if owner_id != viewer_id:
        if are_friends(db, owner_id, viewer_id):
            allowed = [Privacy.PUBLIC, Privacy.FRIENDS_ONLY]
        else:
            allowed = [Privacy.PUBLIC]
        query = query.filter(Status.privacy.in_(allowed))
    return query.order_by(Status.created_at.desc(), Status.id.desc()).all()


def get_friends_statuses(db: Session, user_id: str) -> Sequence[Status]:
    """Return live statuses from the user's friends, newest first."""
    return (
        db.query(Status)
        .filter(
            Status.user_id.in_(friend_ids(user_id)),
            Status.expires_at > utcnow(),
        )
        .order_by(Status.created_at.desc(), Status.id.desc())
        .all()
    )


def _find_view(db: Session, status_id: int, viewer_id: str) -> StatusView | None:
    return (
        db.query(StatusView)
        .filter(StatusView.status_id == status_id, StatusView.viewer_id == viewer_id)
        .first()
    )


def mark_status_viewed(db: Session, status_id: int, viewer_id: str) -> StatusView:
    """Record that ``viewer_id`` saw a status; repeat views return the first one.

    Raises:
        NotFoundError: If the status does not exist.
        IntegrityError: If the viewer does not exist.
    """
    if db.get(Status, status_id) is None:
        raise NotFoundError("Status not found")

    view = _find_view(db, status_id, viewer_id)
    if view is not None:
        return view

    view = StatusView(status_id=status_id, viewer_id=viewer_id)
    db.add(view)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # A concurrent request may have inserted the same view.
        existing = _find_view(db, status_id, viewer_id)
        if existing is not None:
            return existing
        logger.warning("View of status %s by %s rejected", status_id, viewer_id)
        raise
    db.refresh(view)
    return view
