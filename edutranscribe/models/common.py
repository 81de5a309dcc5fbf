# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared field types and validators for request/response models."""

from typing import Annotated, Literal
from urllib.parse import quote

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator

ClassDuration = Literal[30, 45, 60, 90, 120]

AVATAR_FALLBACK_URL = "https://api.dicebear.com/7.x/initials/svg?seed={seed}"


def check_email_syntax(value: str) -> str:
    """Validate e-mail syntax and return the value exactly as given.

    Unlike pydantic's EmailStr, the address is not normalized: profile
    lookup relies on exact string equality with what was stored.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


def check_not_blank(value: str) -> str:
    """Reject empty or whitespace-only strings."""
    if not value.strip():
        raise ValueError("must not be blank")
    return value


EmailAddress = Annotated[str, AfterValidator(check_email_syntax)]
NonBlankStr = Annotated[str, AfterValidator(check_not_blank)]


def avatar_or_fallback(avatar_url: str | None, email: str) -> str:
    """Return the stored avatar or a generated initials avatar."""
    return avatar_url or AVATAR_FALLBACK_URL.format(seed=quote(email))
