"""Call history."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tingling.models import CallLog, CallOutcome, CallType

__all__ = ["log_call", "get_call_logs"]

logger = logging.getLogger(__name__)


def log_call(
    db: Session,
    caller_id: str,
    receiver_id: str,
    call_type: CallType,
    status: CallOutcome,
    duration: int | None = None,
) -> CallLog:
    """Append a finished call to the log.

    Raises:
        IntegrityError: If either user does not exist or ``duration`` is negative.
    """
    entry = CallLog(
        caller_id=caller_id,
        receiver_id=receiver_id,
        call_type=CallType(call_type),
        status=CallOutcome(status),
        duration=duration,
    )
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Call log from %s to %s rejected", caller_id, receiver_id)
        raise
    db.refresh(entry)
    return entry


def get_call_logs(db: Session, user_id: str) -> Sequence[CallLog]:
    """Return calls the user placed or received, newest first."""
    return (
        db.query(CallLog)
        .filter(or_(CallLog.caller_id == user_id, CallLog.receiver_id == user_id))
        .order_by(CallLog.created_at.desc(), CallLog.id.desc())
        .all()
    )
