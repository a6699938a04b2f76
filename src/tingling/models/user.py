# src/tingling/models/user.py
"""SQLAlchemy model for user accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from tingling.db.session import Base
from tingling.db.time import utcnow
from tingling.models.enums import CallStatus, db_enum

USER_ID_PREFIX = "ting-"
USER_ID_DIGITS = 4


class User(Base):
    """Account created on first external sign-in and never hard-deleted."""

    __tablename__ = "users"

    # Human-readable handle, e.g. ``ting-0421``.
    id: Mapped[str] = mapped_column(Text, primary_key=True)
    external_auth_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    emoji: Mapped[str] = mapped_column(Text, nullable=False)
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    call_status: Mapped[CallStatus] = mapped_column(
        db_enum(CallStatus, "call_status"),
        nullable=False,
        default=CallStatus.OFFLINE,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r}>"
