# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response models for the EduTranscribe API."""

from edutranscribe.models.class_ import (
    BookClassRequest,
    ClassListResponse,
    ClassResponse,
    UpdateClassRequest,
)
from edutranscribe.models.common import (
    ClassDuration,
    EmailAddress,
    NonBlankStr,
    avatar_or_fallback,
)
from edutranscribe.models.invitation import (
    InvitationListResponse,
    InvitationResponse,
    ResendInvitationResponse,
)
from edutranscribe.models.onboarding import (
    ClassBookingStatus,
    CreatedInvitation,
    LinkedExisting,
    NotificationStatus,
    OnboardingOutcome,
    OnboardingWarning,
    OnboardingWarningCode,
    OnboardStudentRequest,
)
from edutranscribe.models.profile import ProfileResponse
from edutranscribe.models.student import (
    EnrollmentInfo,
    RegisterStudentRequest,
    StudentProfileResponse,
)
from edutranscribe.models.teacher import (
    RegisterTeacherRequest,
    RosterResponse,
    RosterStudent,
    TeacherResponse,
)

__all__ = [
    # Common
    "ClassDuration",
    "EmailAddress",
    "NonBlankStr",
    "avatar_or_fallback",
    # Onboarding
    "OnboardStudentRequest",
    "OnboardingOutcome",
    "OnboardingWarning",
    "OnboardingWarningCode",
    "LinkedExisting",
    "CreatedInvitation",
    "ClassBookingStatus",
    "NotificationStatus",
    # Classes
    "BookClassRequest",
    "UpdateClassRequest",
    "ClassResponse",
    "ClassListResponse",
    # Invitations
    "InvitationResponse",
    "InvitationListResponse",
    "ResendInvitationResponse",
    # Profiles
    "ProfileResponse",
    # Students
    "RegisterStudentRequest",
    "EnrollmentInfo",
    "StudentProfileResponse",
    # Teachers
    "RegisterTeacherRequest",
    "TeacherResponse",
    "RosterStudent",
    "RosterResponse",
]
