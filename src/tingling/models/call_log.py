"""Append-only record of finished call attempts."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from tingling.db.session import Base
from tingling.db.time import utcnow
from tingling.models.enums import CallOutcome, CallType, db_enum


class CallLog(Base):
    """A call between two users, logged after it ended."""

    __tablename__ = "call_logs"
    __table_args__ = (
        CheckConstraint("duration IS NULL OR duration >= 0", name="ck_call_logs_duration"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    caller_id: Mapped[str] = mapped_column(
        Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    receiver_id: Mapped[str] = mapped_column(
        Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    call_type: Mapped[CallType] = mapped_column(db_enum(CallType, "call_type"), nullable=False)
    status: Mapped[CallOutcome] = mapped_column(db_enum(CallOutcome, "call_log_status"), nullable=False)
    # Seconds; null for missed and rejected calls.
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
