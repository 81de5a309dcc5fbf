# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student registration and profile models."""

from pydantic import BaseModel, Field

from edutranscribe.models.class_ import ClassResponse
from edutranscribe.models.common import EmailAddress, NonBlankStr
from edutranscribe.models.profile import ProfileResponse


class RegisterStudentRequest(BaseModel):
    """Self-registration of the authenticated principal as a student.

    Without a known teacher_code the student is parked under UNASSIGNED
    until a teacher claims them.
    """

    full_name: NonBlankStr = Field(..., max_length=255)
    email: EmailAddress = Field(..., max_length=255)
    grade: str | None = Field(None, max_length=100)
    teacher_code: str | None = Field(None, max_length=20)


class EnrollmentInfo(BaseModel):
    """One Student row of the current profile."""

    student_id: str
    teacher_code: str
    teacher_name: str | None = None
    grade: str | None = None
    is_registered: bool


class StudentProfileResponse(BaseModel):
    """The student's own profile with enrollments and classes."""

    profile: ProfileResponse
    enrollments: list[EnrollmentInfo]
    classes: list[ClassResponse]
