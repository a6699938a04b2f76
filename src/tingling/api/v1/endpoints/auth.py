# src/tingling/api/v1/endpoints/auth.py
"""Authentication endpoints for the Tingling API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from tingling.api.v1.dependencies import CurrentUserDep, SessionDep
from tingling.core.security import create_access_token
from tingling.schemas.user import SessionRequest, SessionResponse, UserResponse
from tingling.services.auth import AuthProvider, get_auth_provider, sign_in

router = APIRouter(prefix="/auth", tags=["authentication"])

AuthProviderDep = Annotated[AuthProvider, Depends(get_auth_provider)]


@router.post("/session", response_model=SessionResponse, status_code=status.HTTP_200_OK)
async def create_session(
    request: SessionRequest,
    db: SessionDep,
    provider: AuthProviderDep,
) -> SessionResponse:
    """Exchange a provider credential for an access token.

    The first successful sign-in for an identity creates the user.
    """
    user, created = sign_in(
        db,
        provider,
        request.credential,
        name=request.name,
        emoji=request.emoji,
        picture_url=request.profile_picture_url,
    )
    return SessionResponse(
        access_token=create_access_token(user.id),
        created=created,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentUserDep) -> UserResponse:
    """Return the user behind the bearer token."""
    return UserResponse.model_validate(current_user)
