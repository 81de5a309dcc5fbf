# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain package.

Only decoding of the acting principal lives here; token issuance and
refresh belong to the identity provider.
"""

from edutranscribe.domains.auth.jwt import (
    InvalidTokenError,
    JWTError,
    JWTManager,
    PrincipalRole,
    TokenExpiredError,
    TokenPayload,
)

__all__ = [
    "JWTManager",
    "TokenPayload",
    "PrincipalRole",
    "JWTError",
    "TokenExpiredError",
    "InvalidTokenError",
]
