"""Query helpers for pairs stored without a canonical order."""
from __future__ import annotations

from typing import Any

from sqlalchemy import Select, and_, or_, select, union
from sqlalchemy.sql.elements import ColumnElement

from tingling.models.relationship import Friendship


def either_order(left: Any, right: Any, first: str, second: str) -> ColumnElement[bool]:
    """Match rows whose (left, right) columns hold the two ids in any order."""
    return or_(
        and_(left == first, right == second),
        and_(left == second, right == first),
    )


def friend_ids(user_id: str) -> Select[tuple[str]]:
    """Select the ids of everyone sharing a friendship row with ``user_id``.

    The union deduplicates, so a pair stored in both orders yields one id.
    """
    ids = union(
        select(Friendship.user2_id).where(Friendship.user1_id == user_id),
        select(Friendship.user1_id).where(Friendship.user2_id == user_id),
    ).subquery()
    return select(ids.c.user2_id)
