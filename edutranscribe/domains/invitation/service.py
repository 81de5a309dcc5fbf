# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student invitation service.

This module provides the InvitationService class for:
- Listing a teacher's invitations
- Re-sending a pending invitation e-mail
- Accepting an invitation, which turns it into a registered Student
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.domains.class_ import ClassService
from edutranscribe.domains.profiles import ProfileService
from edutranscribe.domains.teacher import TeacherService
from edutranscribe.infrastructure.database import ConflictUniqueConstraintError, RecordStore
from edutranscribe.infrastructure.database.models import Profile, Student, StudentInvitation
from edutranscribe.infrastructure.notifications import InvitationNotifier
from edutranscribe.models.invitation import (
    InvitationListResponse,
    InvitationResponse,
    ResendInvitationResponse,
)
from edutranscribe.models.student import EnrollmentInfo
from edutranscribe.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class InvitationServiceError(Exception):
    """Base exception for invitation service errors."""

    pass


class InvitationNotFoundError(InvitationServiceError):
    """Raised when an invitation does not exist or belongs to another teacher."""

    pass


class InvitationAlreadyAcceptedError(InvitationServiceError):
    """Raised when an invitation has already been accepted."""

    pass


class InvitationService:
    """Service for managing student invitations.

    Args:
        db: Database session.
        notifier: Sends invitation e-mails. Required for resend_invitation.
    """

    def __init__(self, db: AsyncSession, notifier: InvitationNotifier | None = None) -> None:
        self.db = db
        self.store = RecordStore(db)
        self.notifier = notifier

    async def list_invitations(
        self,
        teacher_id: str,
        pending_only: bool = False,
    ) -> InvitationListResponse:
        """List invitations created by the teacher, newest first."""
        criteria = [StudentInvitation.teacher_id == teacher_id]
        if pending_only:
            criteria.append(StudentInvitation.is_accepted.is_(False))

        invitations = await self.store.find_all(
            StudentInvitation,
            *criteria,
            order_by=(StudentInvitation.created_at.desc(),),
        )
        items = [InvitationResponse.model_validate(i) for i in invitations]
        return InvitationListResponse(invitations=items, total=len(items))

    async def resend_invitation(
        self,
        teacher_id: str,
        invitation_id: str,
    ) -> ResendInvitationResponse:
        """Send the invitation e-mail again.

        Raises:
            TeacherNotFoundError: If the principal is not a teacher.
            InvitationNotFoundError: If the invitation is not the teacher's.
            InvitationAlreadyAcceptedError: If it was already accepted.
        """
        if self.notifier is None:
            raise InvitationServiceError("No notifier configured")

        teacher = await TeacherService(self.db).resolve_teacher(teacher_id)

        invitation = await self.store.find_by_unique_key(
            StudentInvitation, id=invitation_id, teacher_id=teacher_id
        )
        if invitation is None:
            raise InvitationNotFoundError(f"Invitation {invitation_id} not found")
        if invitation.is_accepted:
            raise InvitationAlreadyAcceptedError(f"Invitation {invitation_id} already accepted")

        result = await self.notifier.send_invitation(
            invitation.student_name,
            invitation.student_email,
            invitation.id,
            teacher.full_name,
        )

        return ResendInvitationResponse(
            invitation_id=invitation_id,
            delivery_status=result.status,
            error_message=result.error_message,
        )

    async def accept_invitation(self, principal_id: str, invitation_id: str) -> EnrollmentInfo:
        """Accept an invitation on behalf of the authenticated invitee.

        Reuses the profile that already owns the invitation e-mail, or
        creates one for the principal. The invitee is enrolled under the
        inviting teacher's code as a registered student, the invitation is
        marked accepted and the teacher's pending classes for that e-mail
        are confirmed.

        Raises:
            InvitationNotFoundError: If the invitation does not exist.
            InvitationAlreadyAcceptedError: If it was already accepted.
            TeacherNotFoundError: If the inviting teacher no longer exists.
            ProfileEmailTakenError: If profile creation races with another.
        """
        invitation = await self.store.find_by_unique_key(StudentInvitation, id=invitation_id)
        if invitation is None:
            raise InvitationNotFoundError(f"Invitation {invitation_id} not found")
        if invitation.is_accepted:
            raise InvitationAlreadyAcceptedError(f"Invitation {invitation_id} already accepted")

        teacher_id = invitation.teacher_id
        student_email = invitation.student_email
        student_name = invitation.student_name
        student_level = invitation.student_level

        teacher = await TeacherService(self.db).resolve_teacher(teacher_id)

        profile = await self.store.find_by_unique_key(Profile, email=student_email)
        if profile is None:
            profile = await ProfileService(self.db).ensure_profile(
                principal_id=principal_id,
                email=student_email,
                full_name=student_name,
                role="student",
            )
        profile_id = profile.id

        student = await self._enroll(profile_id, teacher.teacher_code, student_level)
        student_id = student.id
        grade = student.grade

        invitation = await self.store.find_one(StudentInvitation, id=invitation_id)
        await self.store.update(invitation, is_accepted=True, accepted_at=utc_now())

        confirmed = await ClassService(self.db).confirm_pending_classes(teacher_id, student_email)

        logger.info(
            "Accepted invitation: invitation=%s, profile=%s, teacher_code=%s, confirmed_classes=%d",
            invitation_id,
            profile_id,
            teacher.teacher_code,
            confirmed,
        )

        return EnrollmentInfo(
            student_id=student_id,
            teacher_code=teacher.teacher_code,
            teacher_name=teacher.full_name,
            grade=grade,
            is_registered=True,
        )

    async def _enroll(self, profile_id: str, teacher_code: str, level: str | None) -> Student:
        existing = await self.store.find_by_unique_key(
            Student, profile_id=profile_id, teacher_code=teacher_code
        )
        if existing is not None:
            return await self.store.update(existing, is_registered=True)

        try:
            return await self.store.insert(
                Student(
                    profile_id=profile_id,
                    teacher_code=teacher_code,
                    grade=level,
                    is_registered=True,
                )
            )
        except ConflictUniqueConstraintError:
            # Enrolled concurrently
            existing = await self.store.find_one(
                Student, profile_id=profile_id, teacher_code=teacher_code
            )
            return await self.store.update(existing, is_registered=True)
