# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher registration and roster models."""

from datetime import datetime

from pydantic import BaseModel, Field

from edutranscribe.models.common import EmailAddress, NonBlankStr


class RegisterTeacherRequest(BaseModel):
    """Request to register the authenticated principal as a teacher."""

    full_name: NonBlankStr = Field(..., max_length=255)
    email: EmailAddress = Field(..., max_length=255)
    school_name: str | None = Field(None, max_length=255)
    subject: str | None = Field(None, max_length=255)


class TeacherResponse(BaseModel):
    """Teacher identity including the code shared with students."""

    id: str
    full_name: str
    email: str
    teacher_code: str
    school_name: str | None = None
    subject: str | None = None
    avatar_url: str


class RosterStudent(BaseModel):
    """A student enrolled under a teacher code."""

    student_id: str
    profile_id: str
    full_name: str
    email: str
    level: str
    teacher_code: str
    is_registered: bool
    avatar_url: str
    enrolled_at: datetime


class RosterResponse(BaseModel):
    """List of roster entries."""

    students: list[RosterStudent]
    total: int
