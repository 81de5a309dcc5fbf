# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class scheduling service.

This module provides the ClassService class for:
- Booking a class (directly or as part of student onboarding)
- Listing, updating and deleting a teacher's classes
- Listing the classes booked for a student e-mail
"""

from __future__ import annotations

import logging
from datetime import date, time
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.infrastructure.database import RecordStore, StoreError
from edutranscribe.infrastructure.database.models import (
    ALLOWED_DURATIONS,
    ClassStatus,
    PaymentStatus,
    ScheduledClass,
)
from edutranscribe.models.class_ import (
    BookClassRequest,
    ClassListResponse,
    ClassResponse,
    UpdateClassRequest,
)
from edutranscribe.utils.datetime import is_past_date, utc_today

logger = logging.getLogger(__name__)

NULLABLE_CLASS_FIELDS = frozenset({"student_level", "meeting_link", "notes"})


class ClassServiceError(Exception):
    """Base exception for class service errors."""

    pass


class ClassNotFoundError(ClassServiceError):
    """Raised when a class does not exist for the teacher."""

    pass


class ClassBookingFailedError(ClassServiceError):
    """Raised when a class row could not be created."""

    pass


class PastClassDateError(ClassBookingFailedError):
    """Raised when the class date is before today."""

    pass


class ClassService:
    """Service for booking and managing classes.

    Args:
        db: Database session.
        today_provider: Returns the current date. Class dates before it
            are rejected.
    """

    def __init__(
        self,
        db: AsyncSession,
        today_provider: Callable[[], date] = utc_today,
    ) -> None:
        self.store = RecordStore(db)
        self.today_provider = today_provider

    async def book_class(
        self,
        teacher_id: str,
        *,
        student_name: str,
        student_email: str,
        student_level: str | None,
        topic: str,
        class_date: date,
        class_time: time,
        duration: int,
        status: ClassStatus,
        payment_status: PaymentStatus = PaymentStatus.UNPAID,
        meeting_link: str | None = None,
        notes: str | None = None,
    ) -> ScheduledClass:
        """Create a class row.

        Returns:
            The committed class.

        Raises:
            PastClassDateError: If class_date is before today.
            ClassBookingFailedError: If the duration is not allowed or the
                store rejects the insert.
        """
        if is_past_date(class_date, self.today_provider()):
            raise PastClassDateError(f"Class date {class_date.isoformat()} is in the past")
        if duration not in ALLOWED_DURATIONS:
            raise ClassBookingFailedError(f"Duration {duration} is not allowed")

        try:
            booked = await self.store.insert(
                ScheduledClass(
                    teacher_id=teacher_id,
                    student_name=student_name,
                    student_email=student_email,
                    student_level=student_level,
                    topic=topic,
                    class_date=class_date,
                    class_time=class_time,
                    duration=duration,
                    status=status.value,
                    payment_status=payment_status.value,
                    meeting_link=meeting_link,
                    notes=notes,
                )
            )
        except StoreError as e:
            raise ClassBookingFailedError(f"Class could not be saved: {e}") from e

        logger.info(
            "Booked class: class=%s, teacher=%s, date=%s, status=%s",
            booked.id,
            teacher_id,
            class_date.isoformat(),
            status.value,
        )
        return booked

    async def create_class(self, teacher_id: str, request: BookClassRequest) -> ClassResponse:
        """Book a class from a calendar request."""
        booked = await self.book_class(
            teacher_id,
            student_name=request.student_name,
            student_email=request.student_email,
            student_level=request.student_level,
            topic=request.topic,
            class_date=request.class_date,
            class_time=request.class_time,
            duration=request.duration,
            status=request.status,
            payment_status=request.payment_status,
            meeting_link=request.meeting_link,
            notes=request.notes,
        )
        return ClassResponse.model_validate(booked)

    async def list_classes(self, teacher_id: str) -> ClassListResponse:
        """List the teacher's classes ordered by date and time."""
        classes = await self.store.find_all(
            ScheduledClass,
            ScheduledClass.teacher_id == teacher_id,
            order_by=(ScheduledClass.class_date, ScheduledClass.class_time),
        )
        items = [ClassResponse.model_validate(c) for c in classes]
        return ClassListResponse(classes=items, total=len(items))

    async def list_classes_for_student(self, student_email: str) -> list[ClassResponse]:
        """List the classes booked for an e-mail, across teachers."""
        classes = await self.store.find_all(
            ScheduledClass,
            ScheduledClass.student_email == student_email,
            order_by=(ScheduledClass.class_date, ScheduledClass.class_time),
        )
        return [ClassResponse.model_validate(c) for c in classes]

    async def update_class(
        self,
        teacher_id: str,
        class_id: str,
        request: UpdateClassRequest,
    ) -> ClassResponse:
        """Apply a partial update to one of the teacher's classes.

        Only fields present in the request are changed. An explicit null
        clears optional fields and is ignored for required ones.

        Raises:
            ClassNotFoundError: If the class does not belong to the teacher.
        """
        scheduled = await self._get_class(teacher_id, class_id)

        changes: dict[str, Any] = {}
        for field, value in request.model_dump(exclude_unset=True).items():
            if value is None and field not in NULLABLE_CLASS_FIELDS:
                continue
            if isinstance(value, (ClassStatus, PaymentStatus)):
                value = value.value
            changes[field] = value

        if changes:
            scheduled = await self.store.update(scheduled, **changes)
            logger.info("Updated class: class=%s, fields=%s", class_id, sorted(changes))

        return ClassResponse.model_validate(scheduled)

    async def delete_class(self, teacher_id: str, class_id: str) -> None:
        """Delete one of the teacher's classes.

        Raises:
            ClassNotFoundError: If the class does not belong to the teacher.
        """
        scheduled = await self._get_class(teacher_id, class_id)
        await self.store.delete(scheduled)
        logger.info("Deleted class: class=%s, by=%s", class_id, teacher_id)

    async def confirm_pending_classes(self, teacher_id: str, student_email: str) -> int:
        """Move the teacher's pending classes for an e-mail to Programada.

        Returns:
            Number of classes confirmed.
        """
        pending = await self.store.find_all(
            ScheduledClass,
            ScheduledClass.teacher_id == teacher_id,
            ScheduledClass.student_email == student_email,
            ScheduledClass.status == ClassStatus.PENDING.value,
        )
        for scheduled in pending:
            await self.store.update(scheduled, status=ClassStatus.SCHEDULED.value)
        return len(pending)

    async def _get_class(self, teacher_id: str, class_id: str) -> ScheduledClass:
        scheduled = await self.store.find_by_unique_key(
            ScheduledClass, id=class_id, teacher_id=teacher_id
        )
        if scheduled is None:
            raise ClassNotFoundError(f"Class {class_id} not found")
        return scheduled
