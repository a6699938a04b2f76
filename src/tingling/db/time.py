"""Clock helpers shared by the models and the API schemas.

SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
columns. Every stored value is UTC, so naive values are tagged as such before
they leave the service.
"""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]
