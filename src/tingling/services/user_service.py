"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging
import secrets
from typing import Sequence

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tingling.core.settings import settings
from tingling.db.time import utcnow
from tingling.models.user import USER_ID_DIGITS, USER_ID_PREFIX, User
from tingling.schemas.user import UserCreate, UserUpdate
from tingling.services.errors import ConflictError, NotFoundError

__all__ = [
    "generate_user_id",
    "get_user",
    "get_user_by_external_id",
    "create_user",
    "update_user",
    "search_users",
]

logger = logging.getLogger(__name__)

# Columns that reject NULL; an explicit null in an update leaves them untouched.
_REQUIRED_FIELDS = frozenset({"name", "emoji", "call_status"})


def generate_user_id() -> str:
    """Return a random identifier such as ``ting-0421``."""
    suffix = secrets.randbelow(10**USER_ID_DIGITS)
    return f"{USER_ID_PREFIX}{suffix:0{USER_ID_DIGITS}d}"


def get_user(db: Session, user_id: str) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_external_id(db: Session, external_auth_id: str) -> User | None:
    """Return the user linked to an external auth identity."""
    return db.query(User).filter(User.external_auth_id == external_auth_id).first()


def _allocate_user_id(db: Session) -> str:
    for _ in range(settings.user_id_max_attempts):
        candidate = generate_user_id()
        if db.get(User, candidate) is None:
            return candidate
    raise ConflictError("Could not allocate a free user id")


def create_user(db: Session, user: UserCreate) -> User:
    """Persist a new user with a freshly drawn ``ting-NNNN`` id.

    Raises:
        ConflictError: If no free identifier could be drawn.
        IntegrityError: If the external auth id is already linked.
    """
    db_user = User(
        id=_allocate_user_id(db),
        external_auth_id=user.external_auth_id,
        name=user.name,
        emoji=user.emoji,
        profile_picture_url=user.profile_picture_url,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("User creation failed for external id %s", user.external_auth_id)
        raise
    db.refresh(db_user)
    logger.info("Created user %s", db_user.id)
    return db_user


def update_user(db: Session, user_id: str, update_data: UserUpdate) -> User:
    """Apply partial updates to an existing user and stamp ``updated_at``.

    Raises:
        NotFoundError: If the user does not exist.
    """
    db_user = db.get(User, user_id)
    if db_user is None:
        raise NotFoundError(f"User with id {user_id} not found")

    update_dict = update_data.model_dump(exclude_unset=True)
    for key, value in update_dict.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(db_user, key, value)
    db_user.updated_at = utcnow()

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def search_users(db: Session, query: str) -> Sequence[User]:
    """Find users by exact id or by a case-insensitive name fragment.

    Blank queries return no results rather than every user.
    """
    term = (query or "").strip()
    if not term:
        return []

    return (
        db.query(User)
        .filter(
            or_(
                func.lower(User.id) == term.lower(),
                User.name.icontains(term, autoescape=True),
            )
        )
        .order_by(User.name, User.id)
        .all()
    )
