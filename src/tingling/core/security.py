"""Session token helpers built on signed JWTs."""
from __future__ import annotations

from datetime import timedelta

from jose import jwt

from tingling.core.settings import settings
from tingling.db.time import utcnow


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Issue a signed access token whose subject is the user identifier.

    Args:
        user_id: Identifier of the already-resolved user (``ting-NNNN``).
        expires_delta: Optional lifetime override.

    Returns:
        Encoded JWT string.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    issued_at = utcnow()
    payload = {
        "sub": user_id,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the subject of a valid token.

    Raises:
        jose.JWTError: If the token is malformed, expired or wrongly signed.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    return payload.get("sub")
