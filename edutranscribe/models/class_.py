# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class booking request/response models."""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field

from edutranscribe.infrastructure.database.models import ClassStatus, PaymentStatus
from edutranscribe.models.common import ClassDuration, EmailAddress, NonBlankStr


class BookClassRequest(BaseModel):
    """Request to book a class directly from the teacher's calendar."""

    student_name: NonBlankStr = Field(..., max_length=255)
    student_email: EmailAddress = Field(..., max_length=255)
    student_level: str | None = Field(None, max_length=100)
    topic: NonBlankStr = Field(..., max_length=255)
    class_date: date
    class_time: time
    duration: ClassDuration = 60
    status: ClassStatus = ClassStatus.SCHEDULED
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    meeting_link: str | None = Field(None, max_length=500)
    notes: str | None = None


class UpdateClassRequest(BaseModel):
    """Partial class update. Only fields present in the request change."""

    student_name: NonBlankStr | None = Field(None, max_length=255)
    student_email: EmailAddress | None = Field(None, max_length=255)
    student_level: str | None = Field(None, max_length=100)
    topic: NonBlankStr | None = Field(None, max_length=255)
    class_date: date | None = None
    class_time: time | None = None
    duration: ClassDuration | None = None
    status: ClassStatus | None = None
    payment_status: PaymentStatus | None = None
    meeting_link: str | None = Field(None, max_length=500)
    notes: str | None = None


class ClassResponse(BaseModel):
    """A scheduled class."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    teacher_id: str
    student_name: str
    student_email: str
    student_level: str | None = None
    topic: str
    class_date: date
    class_time: time
    duration: int
    status: str
    payment_status: str
    meeting_link: str | None = None
    notes: str | None = None
    created_at: datetime


class ClassListResponse(BaseModel):
    """List of classes."""

    classes: list[ClassResponse]
    total: int
