# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Profile service.

Profiles are created once per person, keyed by the auth principal id,
and e-mail is unique across all of them.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.infrastructure.database import ConflictUniqueConstraintError, RecordStore
from edutranscribe.infrastructure.database.models import Profile
from edutranscribe.models.common import avatar_or_fallback
from edutranscribe.models.profile import ProfileResponse

logger = logging.getLogger(__name__)


class ProfileServiceError(Exception):
    """Base exception for profile service errors."""

    pass


class ProfileNotFoundError(ProfileServiceError):
    """Raised when the principal has no profile."""

    pass


class ProfileEmailTakenError(ProfileServiceError):
    """Raised when another profile already uses the e-mail."""

    pass


class ProfileRoleConflictError(ProfileServiceError):
    """Raised when the principal's profile has a different role."""

    pass


class ProfileService:
    """Service for creating and reading profiles."""

    def __init__(self, db: AsyncSession) -> None:
        self.store = RecordStore(db)

    async def get_profile(self, profile_id: str) -> Profile:
        """Get a profile by id.

        Raises:
            ProfileNotFoundError: If no profile exists.
        """
        profile = await self.store.find_by_unique_key(Profile, id=profile_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile {profile_id} not found")
        return profile

    async def ensure_profile(
        self,
        principal_id: str,
        email: str,
        full_name: str,
        role: str,
    ) -> Profile:
        """Return the principal's profile, creating it if missing.

        Args:
            principal_id: Auth principal id, also the profile id.
            email: E-mail as typed; stored without normalization.
            full_name: Display name.
            role: "teacher" or "student".

        Returns:
            The existing or newly created profile.

        Raises:
            ProfileRoleConflictError: If the existing profile has another role.
            ProfileEmailTakenError: If another profile owns the e-mail.
        """
        profile = await self.store.find_by_unique_key(Profile, id=principal_id)
        if profile is not None:
            if profile.role != role:
                raise ProfileRoleConflictError(
                    f"Profile {principal_id} is registered as {profile.role}"
                )
            return profile

        owner = await self.store.find_by_unique_key(Profile, email=email)
        if owner is not None:
            raise ProfileEmailTakenError(f"E-mail {email} is already registered")

        try:
            profile = await self.store.insert(
                Profile(id=principal_id, email=email, full_name=full_name, role=role)
            )
        except ConflictUniqueConstraintError as e:
            raise ProfileEmailTakenError(f"E-mail {email} is already registered") from e

        logger.info("Created profile: id=%s, role=%s", principal_id, role)
        return profile


def to_profile_response(profile: Profile) -> ProfileResponse:
    """Convert a profile to its API representation."""
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        full_name=profile.full_name,
        role=profile.role,
        avatar_url=avatar_or_fallback(profile.avatar_url, profile.email),
    )
