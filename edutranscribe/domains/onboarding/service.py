# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student onboarding service.

Given the acting teacher and a prospective student's name and e-mail,
onboarding either enrolls an existing profile under the teacher's code
(LinkedExisting) or records a pending invitation (CreatedInvitation),
optionally booking a class in the same call.

Steps run strictly in order and every write commits on its own:

1. Resolve the teacher code. Missing teacher fails with no writes.
2. Look up a profile by exact e-mail. No case-folding or trimming.
3. Profile found: reject an existing (profile, teacher_code) link,
   otherwise insert a registered Student.
4. No profile: insert a StudentInvitation.
5. Optionally book a class (Programada after 3, Pendiente after 4).
6. After 4 only, e-mail the invitation.

Failures in 5 and 6 never undo 3 or 4. They are returned as warnings
on an otherwise successful outcome.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.domains.class_ import ClassBookingFailedError, ClassService
from edutranscribe.domains.teacher import TeacherIdentity, TeacherService
from edutranscribe.infrastructure.database import ConflictUniqueConstraintError, RecordStore
from edutranscribe.infrastructure.database.models import (
    ClassStatus,
    PaymentStatus,
    Profile,
    Student,
    StudentInvitation,
)
from edutranscribe.infrastructure.notifications import InvitationNotifier
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
from edutranscribe.utils.datetime import utc_today

logger = logging.getLogger(__name__)


class OnboardingServiceError(Exception):
    """Base exception for onboarding service errors."""

    pass


class DuplicateEnrollmentError(OnboardingServiceError):
    """Raised when the profile is already enrolled under the teacher code."""

    pass


class OnboardingService:
    """Service for onboarding students under a teacher.

    Args:
        db: Database session.
        notifier: Sends the invitation e-mail for new students.
        today_provider: Returns the current date for class date checks.
    """

    def __init__(
        self,
        db: AsyncSession,
        notifier: InvitationNotifier,
        today_provider: Callable[[], date] = utc_today,
    ) -> None:
        self.db = db
        self.store = RecordStore(db)
        self.notifier = notifier
        self.today_provider = today_provider

    async def onboard_student(
        self,
        teacher_id: str,
        request: OnboardStudentRequest,
    ) -> OnboardingOutcome:
        """Onboard a student under the acting teacher.

        Args:
            teacher_id: Auth principal id of the acting teacher.
            request: Validated student and optional class data.

        Returns:
            OnboardingOutcome with the branch taken, created ids, class
            booking and notification status, and any warnings.

        Raises:
            TeacherNotFoundError: If the principal has no teacher code.
            DuplicateEnrollmentError: If the profile is already enrolled
                under the teacher code.
            TransientStoreError: If the store fails before the enrollment
                or invitation is committed.
        """
        teacher = await TeacherService(self.db).resolve_teacher(teacher_id)

        profile = await self.store.find_by_unique_key(Profile, email=request.student_email)

        if profile is not None:
            branch: LinkedExisting | CreatedInvitation = await self._link_existing(
                teacher, profile.id, request
            )
            class_status = ClassStatus.SCHEDULED
        else:
            branch = await self._create_invitation(teacher, request)
            class_status = ClassStatus.PENDING

        outcome = OnboardingOutcome(
            teacher_id=teacher.id,
            teacher_code=teacher.teacher_code,
            branch=branch,
        )

        await self._book_class(outcome, teacher, request, class_status)

        if isinstance(branch, CreatedInvitation):
            await self._notify(outcome, teacher, request, branch.invitation_id)

        logger.info(
            "Onboarded student: teacher=%s, branch=%s, class_booking=%s, notification=%s, warnings=%d",
            teacher.id,
            branch.kind,
            outcome.class_booking.value,
            outcome.notification.value,
            len(outcome.warnings),
        )
        return outcome

    # =========================================================================
    # Branches
    # =========================================================================

    async def _link_existing(
        self,
        teacher: TeacherIdentity,
        profile_id: str,
        request: OnboardStudentRequest,
    ) -> LinkedExisting:
        existing = await self.store.find_by_unique_key(
            Student, profile_id=profile_id, teacher_code=teacher.teacher_code
        )
        if existing is not None:
            raise DuplicateEnrollmentError(
                f"Student {request.student_email} is already enrolled with {teacher.teacher_code}"
            )

        try:
            student = await self.store.insert(
                Student(
                    profile_id=profile_id,
                    teacher_code=teacher.teacher_code,
                    grade=request.student_level,
                    is_registered=True,
                )
            )
        except ConflictUniqueConstraintError as e:
            raise DuplicateEnrollmentError(
                f"Student {request.student_email} is already enrolled with {teacher.teacher_code}"
            ) from e

        logger.info(
            "Linked existing profile: profile=%s, student=%s, teacher_code=%s",
            profile_id,
            student.id,
            teacher.teacher_code,
        )
        return LinkedExisting(profile_id=profile_id, student_id=student.id)

    async def _create_invitation(
        self,
        teacher: TeacherIdentity,
        request: OnboardStudentRequest,
    ) -> CreatedInvitation:
        invitation = await self.store.insert(
            StudentInvitation(
                teacher_id=teacher.id,
                student_name=request.student_name,
                student_email=request.student_email,
                student_level=request.student_level,
                is_accepted=False,
            )
        )

        logger.info("Created invitation: invitation=%s, teacher=%s", invitation.id, teacher.id)
        return CreatedInvitation(invitation_id=invitation.id)

    # =========================================================================
    # Non-fatal sub-steps
    # =========================================================================

    async def _book_class(
        self,
        outcome: OnboardingOutcome,
        teacher: TeacherIdentity,
        request: OnboardStudentRequest,
        status: ClassStatus,
    ) -> None:
        if not request.schedule_class:
            return

        if not request.has_complete_class_details:
            outcome.class_booking = ClassBookingStatus.SKIPPED
            logger.info("Class booking skipped: incomplete class details, teacher=%s", teacher.id)
            return

        try:
            booked = await ClassService(self.db, self.today_provider).book_class(
                teacher.id,
                student_name=request.student_name,
                student_email=request.student_email,
                student_level=request.student_level,
                topic=request.topic,
                class_date=request.class_date,
                class_time=request.class_time,
                duration=request.duration,
                status=status,
                payment_status=PaymentStatus.UNPAID,
                meeting_link=request.meeting_link,
                notes=request.notes,
            )
        except ClassBookingFailedError as e:
            logger.warning("Class booking failed during onboarding: teacher=%s, error=%s", teacher.id, e)
            outcome.class_booking = ClassBookingStatus.FAILED
            outcome.warnings.append(
                OnboardingWarning(code=OnboardingWarningCode.CLASS_BOOKING_FAILED, message=str(e))
            )
            return

        outcome.class_booking = ClassBookingStatus.BOOKED
        outcome.class_id = booked.id

    async def _notify(
        self,
        outcome: OnboardingOutcome,
        teacher: TeacherIdentity,
        request: OnboardStudentRequest,
        invitation_id: str,
    ) -> None:
        result = await self.notifier.send_invitation(
            request.student_name,
            request.student_email,
            invitation_id,
            teacher.full_name,
        )

        if result.succeeded:
            outcome.notification = NotificationStatus.SENT
            return

        outcome.notification = NotificationStatus.FAILED
        outcome.warnings.append(
            OnboardingWarning(
                code=OnboardingWarningCode.NOTIFICATION_FAILED,
                message=result.error_message or f"Invitation e-mail {result.status.value}",
            )
        )
