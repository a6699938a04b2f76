# tests/services/test_auth_service.py
"""Tests for session establishment through an auth provider."""

from __future__ import annotations

import pytest

from tingling.services.auth import DemoAuthProvider, ExternalIdentity, sign_in
from tingling.services.errors import InvalidOperationError


class ProfileProvider:
    """Provider returning a fixed identity with profile details."""

    def verify(self, credential: str) -> ExternalIdentity:
        return ExternalIdentity(
            external_auth_id=f"oidc|{credential}",
            display_name="Provider Name",
            picture_url="https://id.example/avatar.png",
        )


def test_demo_provider_trusts_credential():
    identity = DemoAuthProvider().verify("  demo-user  ")
    assert identity == ExternalIdentity(external_auth_id="demo-user")


def test_demo_provider_rejects_blank_credential():
    with pytest.raises(InvalidOperationError):
        DemoAuthProvider().verify("   ")


def test_first_sign_in_creates_user(db_session):
    user, created = sign_in(db_session, DemoAuthProvider(), "demo-1", name="Dana", emoji="🐙")

    assert created is True
    assert user.external_auth_id == "demo-1"
    assert user.name == "Dana"
    assert user.emoji == "🐙"


def test_second_sign_in_returns_same_user(db_session):
    first, _ = sign_in(db_session, DemoAuthProvider(), "demo-2", name="Eve")
    again, created = sign_in(db_session, DemoAuthProvider(), "demo-2", name="Ignored")

    assert created is False
    assert again.id == first.id
    assert again.name == "Eve"


def test_profile_falls_back_to_provider_then_defaults(db_session):
    user, _ = sign_in(db_session, ProfileProvider(), "abc")
    assert user.external_auth_id == "oidc|abc"
    assert user.name == "Provider Name"
    assert user.profile_picture_url == "https://id.example/avatar.png"

    plain, _ = sign_in(db_session, DemoAuthProvider(), "no-profile")
    assert plain.name == "New User"
    assert plain.emoji
