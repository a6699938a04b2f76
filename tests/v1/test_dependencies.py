# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from tingling.api.v1.dependencies import get_current_user
from tingling.core.security import create_access_token
from tingling.core.settings import settings


class TestGetCurrentUser:
    """Test the get_current_user dependency function."""

    def test_get_current_user_success(self, db_session, test_user):
        token = create_access_token(test_user.id)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = get_current_user(credentials, db_session)

        assert result.id == test_user.id

    def test_token_without_subject(self, db_session):
        token = jwt.encode({"foo": "bar"}, settings.secret_key, algorithm=settings.jwt_algorithm)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(credentials, db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "Could not validate credentials"

    def test_token_signed_with_other_key(self, db_session, test_user):
        token = jwt.encode({"sub": test_user.id}, "another-secret", algorithm=settings.jwt_algorithm)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(credentials, db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
