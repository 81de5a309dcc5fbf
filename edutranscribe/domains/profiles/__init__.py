# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Profile domain package."""

from edutranscribe.domains.profiles.service import (
    ProfileEmailTakenError,
    ProfileNotFoundError,
    ProfileRoleConflictError,
    ProfileService,
    ProfileServiceError,
    to_profile_response,
)

__all__ = [
    "ProfileService",
    "ProfileServiceError",
    "ProfileNotFoundError",
    "ProfileEmailTakenError",
    "ProfileRoleConflictError",
    "to_profile_response",
]
