# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student onboarding domain package.

Links an existing profile to a teacher or creates a pending invitation,
optionally booking a class and e-mailing the invitee.
"""

from edutranscribe.domains.onboarding.service import (
    DuplicateEnrollmentError,
    OnboardingService,
    OnboardingServiceError,
)
from edutranscribe.domains.teacher import TeacherNotFoundError

__all__ = [
    "OnboardingService",
    "OnboardingServiceError",
    "DuplicateEnrollmentError",
    "TeacherNotFoundError",
]
