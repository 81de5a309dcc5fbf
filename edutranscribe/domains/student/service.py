# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student service.

This module provides the StudentService class for:
- Student self-registration, optionally under a teacher code
- The student's own profile with enrollments and classes
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from edutranscribe.domains.class_ import ClassService
from edutranscribe.domains.profiles import ProfileService, to_profile_response
from edutranscribe.infrastructure.database import ConflictUniqueConstraintError, RecordStore
from edutranscribe.infrastructure.database.models import (
    UNASSIGNED_TEACHER_CODE,
    Profile,
    Student,
    Teacher,
)
from edutranscribe.models.student import (
    EnrollmentInfo,
    RegisterStudentRequest,
    StudentProfileResponse,
)

logger = logging.getLogger(__name__)


class StudentServiceError(Exception):
    """Base exception for student service errors."""

    pass


class StudentAlreadyRegisteredError(StudentServiceError):
    """Raised when the profile is already enrolled under the resolved code."""

    pass


class StudentService:
    """Service for student registration and the student's own view."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.store = RecordStore(db)

    async def register_student(
        self,
        principal_id: str,
        request: RegisterStudentRequest,
    ) -> EnrollmentInfo:
        """Register the principal as a student.

        An unknown or missing teacher_code places the student under
        UNASSIGNED.

        Raises:
            ProfileEmailTakenError: If the e-mail belongs to another profile.
            ProfileRoleConflictError: If the principal is a teacher.
            StudentAlreadyRegisteredError: If already enrolled under the code.
        """
        profile = await ProfileService(self.db).ensure_profile(
            principal_id=principal_id,
            email=request.email,
            full_name=request.full_name,
            role="student",
        )
        profile_id = profile.id

        teacher_code = UNASSIGNED_TEACHER_CODE
        teacher_name: str | None = None
        if request.teacher_code:
            teacher = await self.store.find_by_unique_key(Teacher, teacher_code=request.teacher_code)
            if teacher is not None:
                teacher_code = teacher.teacher_code
                teacher_profile = await self.store.find_by_unique_key(Profile, id=teacher.id)
                teacher_name = teacher_profile.full_name if teacher_profile else None
            else:
                logger.info("Unknown teacher code at registration: code=%s", request.teacher_code)

        try:
            student = await self.store.insert(
                Student(
                    profile_id=profile_id,
                    teacher_code=teacher_code,
                    grade=request.grade,
                    is_registered=True,
                )
            )
        except ConflictUniqueConstraintError as e:
            raise StudentAlreadyRegisteredError(
                f"Profile {profile_id} already enrolled under {teacher_code}"
            ) from e

        logger.info("Registered student: profile=%s, teacher_code=%s", profile_id, teacher_code)

        return EnrollmentInfo(
            student_id=student.id,
            teacher_code=teacher_code,
            teacher_name=teacher_name,
            grade=student.grade,
            is_registered=student.is_registered,
        )

    async def get_own_profile(self, principal_id: str) -> StudentProfileResponse:
        """Get the principal's profile, enrollments and classes.

        Classes are matched by the profile e-mail.

        Raises:
            ProfileNotFoundError: If the principal has no profile.
        """
        profile = await ProfileService(self.db).get_profile(principal_id)

        teacher_profile = aliased(Profile)
        stmt = (
            select(Student, teacher_profile.full_name)
            .outerjoin(Teacher, Teacher.teacher_code == Student.teacher_code)
            .outerjoin(teacher_profile, teacher_profile.id == Teacher.id)
            .where(Student.profile_id == principal_id)
            .order_by(Student.created_at)
        )
        rows = await self.store.find_rows(stmt)

        enrollments = [
            EnrollmentInfo(
                student_id=student.id,
                teacher_code=student.teacher_code,
                teacher_name=teacher_name,
                grade=student.grade,
                is_registered=student.is_registered,
            )
            for student, teacher_name in rows
        ]

        classes = await ClassService(self.db).list_classes_for_student(profile.email)

        return StudentProfileResponse(
            profile=to_profile_response(profile),
            enrollments=enrollments,
            classes=classes,
        )
