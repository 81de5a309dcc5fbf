# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for JWT token utilities.

Tests the JWTManager class and token decoding.
"""

from datetime import timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from jose import jwt
from pydantic import SecretStr

from edutranscribe.domains.auth.jwt import (
    InvalidTokenError,
    JWTManager,
    TokenExpiredError,
    TokenPayload,
)


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-jwt-testing")
    settings.algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    return settings


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock) -> JWTManager:
    """Create JWT manager with test settings."""
    return JWTManager(jwt_settings)


class TestJWTManager:
    """Tests for JWTManager class."""

    def test_create_access_token_returns_valid_token(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that create_access_token returns a token string."""
        token = jwt_manager.create_access_token(user_id=str(uuid4()), role="teacher")

        assert isinstance(token, str)
        assert len(token) > 0

    def test_decode_access_token_returns_payload(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token returns the principal claims."""
        user_id = str(uuid4())

        token = jwt_manager.create_access_token(
            user_id=user_id,
            role="student",
            email="ana@example.com",
        )
        payload = jwt_manager.decode_token(token)

        assert isinstance(payload, TokenPayload)
        assert payload.sub == user_id
        assert payload.role == "student"
        assert payload.email == "ana@example.com"
        assert payload.exp - payload.iat == 30 * 60

    def test_role_is_optional(self, jwt_manager: JWTManager) -> None:
        """Test that a principal without a role decodes with role None."""
        payload = jwt_manager.decode_token(jwt_manager.create_access_token(user_id="u-1"))

        assert payload.role is None

    def test_decode_expired_token_raises_error(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token raises error for expired token."""
        token = jwt_manager.create_access_token(
            user_id=str(uuid4()),
            expires_in=timedelta(seconds=-10),
        )

        with pytest.raises(TokenExpiredError, match="Token has expired"):
            jwt_manager.decode_token(token)

    def test_decode_invalid_token_raises_error(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that decode_token raises error for invalid token."""
        with pytest.raises(InvalidTokenError):
            jwt_manager.decode_token("invalid.token.here")

    def test_decode_token_with_wrong_secret_raises_error(
        self,
        jwt_manager: JWTManager,
        jwt_settings: MagicMock,
    ) -> None:
        """Test that decode fails when secret doesn't match."""
        token = jwt_manager.create_access_token(user_id=str(uuid4()))

        jwt_settings.secret_key = SecretStr("different-secret-key")
        other_manager = JWTManager(jwt_settings)

        with pytest.raises(InvalidTokenError):
            other_manager.decode_token(token)

    def test_decode_unknown_role_raises_error(self, jwt_settings: MagicMock) -> None:
        """Test that a role outside teacher/student is rejected."""
        token = jwt.encode(
            {"sub": "u-1", "role": "admin", "exp": 4102444800, "iat": 1700000000},
            jwt_settings.secret_key.get_secret_value(),
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="Invalid token claims"):
            JWTManager(jwt_settings).decode_token(token)

    def test_verify_token_returns_true_for_valid(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that verify_token returns True for valid token."""
        token = jwt_manager.create_access_token(user_id=str(uuid4()))

        assert jwt_manager.verify_token(token) is True

    def test_verify_token_returns_false_for_invalid(
        self,
        jwt_manager: JWTManager,
    ) -> None:
        """Test that verify_token returns False for invalid token."""
        assert jwt_manager.verify_token("invalid.token.here") is False

    def test_tokens_have_unique_jti(self, jwt_manager: JWTManager) -> None:
        """Test that tokens contain unique JTI claims."""
        payload1 = jwt_manager.decode_token(jwt_manager.create_access_token(user_id="u-1"))
        payload2 = jwt_manager.decode_token(jwt_manager.create_access_token(user_id="u-1"))

        assert payload1.jti is not None
        assert payload1.jti != payload2.jti
