"""Session establishment against an external identity provider.

Handlers elsewhere in the service layer receive plain user ids; only this
module turns a credential into a :class:`~tingling.models.User`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from tingling.models import User
from tingling.schemas.user import UserCreate
from tingling.services import user_service
from tingling.services.errors import InvalidOperationError

logger = logging.getLogger(__name__)

DEFAULT_NAME = "New User"
DEFAULT_EMOJI = "🙂"


@dataclass(frozen=True)
class ExternalIdentity:
    """Identity asserted by a provider after it verified a credential."""

    external_auth_id: str
    display_name: str | None = None
    picture_url: str | None = None


class AuthProvider(Protocol):
    def verify(self, credential: str) -> ExternalIdentity:
        """Return the identity behind ``credential`` or raise InvalidOperationError."""
        ...


class DemoAuthProvider:
    """Provider for local development that trusts the credential verbatim."""

    def verify(self, credential: str) -> ExternalIdentity:
        subject = credential.strip()
        if not subject:
            raise InvalidOperationError("Credential must not be empty")
        return ExternalIdentity(external_auth_id=subject)


def get_auth_provider() -> AuthProvider:
    """Return the provider used by the session endpoint."""
    return DemoAuthProvider()


def sign_in(
    db: Session,
    provider: AuthProvider,
    credential: str,
    name: str | None = None,
    emoji: str | None = None,
    picture_url: str | None = None,
) -> tuple[User, bool]:
    """Resolve a credential to a user, creating the account on first sign-in.

    Returns:
        The user and whether this call created it.
    """
    identity = provider.verify(credential)
    user = user_service.get_user_by_external_id(db, identity.external_auth_id)
    if user is not None:
        return user, False

    user = user_service.create_user(
        db,
        UserCreate(
            external_auth_id=identity.external_auth_id,
            name=name or identity.display_name or DEFAULT_NAME,
            emoji=emoji or DEFAULT_EMOJI,
            profile_picture_url=picture_url or identity.picture_url,
        ),
    )
    logger.info("First sign-in for %s created user %s", identity.external_auth_id, user.id)
    return user, True
