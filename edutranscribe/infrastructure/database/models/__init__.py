# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the EduTranscribe database."""

from edutranscribe.infrastructure.database.models.base import (
    Base,
    TimestampMixin,
    UUIDPrimaryKeyMixin,
    generate_uuid,
)
from edutranscribe.infrastructure.database.models.invitation import StudentInvitation
from edutranscribe.infrastructure.database.models.profile import (
    UNASSIGNED_TEACHER_CODE,
    Profile,
    Student,
    Teacher,
)
from edutranscribe.infrastructure.database.models.scheduling import (
    ALLOWED_DURATIONS,
    DEFAULT_DURATION,
    ClassStatus,
    PaymentStatus,
    ScheduledClass,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "generate_uuid",
    "Profile",
    "Teacher",
    "Student",
    "UNASSIGNED_TEACHER_CODE",
    "StudentInvitation",
    "ScheduledClass",
    "ClassStatus",
    "PaymentStatus",
    "ALLOWED_DURATIONS",
    "DEFAULT_DURATION",
]
