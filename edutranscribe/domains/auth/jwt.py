# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT access token utilities.

Decodes the bearer token that identifies the acting principal and its
role. Tokens are issued by the identity provider; create_access_token
exists for operators and tests that need to mint one with the shared
secret.

Example:
    >>> from edutranscribe.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> token = jwt_manager.create_access_token(user_id="user-123", role="teacher")
    >>> claims = jwt_manager.decode_token(token)
"""

import logging
import secrets
from datetime import timedelta
from typing import Literal

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from edutranscribe.core.config.settings import JWTSettings
from edutranscribe.utils.datetime import utc_now

logger = logging.getLogger(__name__)

PrincipalRole = Literal["teacher", "student"]


class TokenPayload(BaseModel):
    """JWT token payload structure.

    Attributes:
        sub: Subject (principal ID, also the profile ID).
        role: Principal role. None before the principal has registered.
        email: Principal e-mail as known to the identity provider.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: JWT ID for token tracking.
    """

    sub: str
    role: PrincipalRole | None = None
    email: str | None = None
    exp: int
    iat: int
    jti: str | None = None


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTManager:
    """JWT access token creation and validation."""

    def __init__(self, settings: JWTSettings) -> None:
        self._settings = settings

    def create_access_token(
        self,
        user_id: str,
        role: PrincipalRole | None = None,
        email: str | None = None,
        expires_in: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: Principal identifier.
            role: Principal role.
            email: Principal e-mail.
            expires_in: Lifetime override. Defaults to the configured expiry.

        Returns:
            JWT access token string.
        """
        now = utc_now()
        exp = now + (expires_in or timedelta(minutes=self._settings.access_token_expire_minutes))

        payload = {
            "sub": str(user_id),
            "role": role,
            "email": email,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def decode_token(self, token: str) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: JWT token string.

        Returns:
            TokenPayload with decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JoseJWTError as e:
            logger.warning("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}") from e

        try:
            return TokenPayload.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError(f"Invalid token claims: {str(e)}") from e

    def verify_token(self, token: str) -> bool:
        """Check whether a token decodes successfully."""
        try:
            self.decode_token(token)
            return True
        except (TokenExpiredError, InvalidTokenError):
            return False
