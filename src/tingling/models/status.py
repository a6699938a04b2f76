"""Models for ephemeral statuses and who has seen them."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tingling.db.session import Base
from tingling.db.time import utcnow
from tingling.models.enums import MediaType, Privacy, db_enum

STATUS_LIFETIME = timedelta(hours=24)


class Status(Base):
    """Short-lived post visible until ``expires_at``.

    Expired rows stay in the table; readers filter them out.
    """

    __tablename__ = "statuses"
    __table_args__ = (
        Index("ix_statuses_user_expires", "user_id", "expires_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_type: Mapped[MediaType] = mapped_column(
        db_enum(MediaType, "media_type"),
        nullable=False,
        default=MediaType.TEXT,
    )
    privacy: Mapped[Privacy] = mapped_column(
        db_enum(Privacy, "privacy"),
        nullable=False,
        default=Privacy.FRIENDS_ONLY,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class StatusView(Base):
    """First time ``viewer_id`` opened a status; one row per (status, viewer)."""

    __tablename__ = "status_views"
    __table_args__ = (
        UniqueConstraint("status_id", "viewer_id", name="uq_status_views_viewer"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    status_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("statuses.id", ondelete="CASCADE"), nullable=False
    )
    viewer_id: Mapped[str] = mapped_column(
        Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    viewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
