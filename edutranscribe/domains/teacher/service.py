# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher service.

This module provides the TeacherService class for:
- Teacher registration with a generated teacher code
- Resolving the acting teacher and its code
- Listing the roster and claiming UNASSIGNED students
"""

from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.domains.profiles import ProfileService
from edutranscribe.infrastructure.database import ConflictUniqueConstraintError, RecordStore
from edutranscribe.infrastructure.database.models import (
    UNASSIGNED_TEACHER_CODE,
    Profile,
    Student,
    Teacher,
)
from edutranscribe.models.common import avatar_or_fallback
from edutranscribe.models.teacher import (
    RegisterTeacherRequest,
    RosterResponse,
    RosterStudent,
    TeacherResponse,
)

logger = logging.getLogger(__name__)

TEACHER_CODE_PREFIX = "PROF"
TEACHER_CODE_LENGTH = 6
TEACHER_CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 5
DEFAULT_STUDENT_LEVEL = "Básico"


def generate_teacher_code() -> str:
    """Generate a teacher code such as ``PROFAB12CD``."""
    suffix = "".join(secrets.choice(TEACHER_CODE_ALPHABET) for _ in range(TEACHER_CODE_LENGTH))
    return f"{TEACHER_CODE_PREFIX}{suffix}"


class TeacherServiceError(Exception):
    """Base exception for teacher service errors."""

    pass


class TeacherNotFoundError(TeacherServiceError):
    """Raised when the principal has no teacher record or teacher code."""

    pass


class TeacherAlreadyExistsError(TeacherServiceError):
    """Raised when the principal is already registered as a teacher."""

    pass


class TeacherCodeExhaustedError(TeacherServiceError):
    """Raised when no free teacher code could be generated."""

    pass


class StudentNotFoundError(TeacherServiceError):
    """Raised when a student record does not exist."""

    pass


class StudentNotAssignableError(TeacherServiceError):
    """Raised when a student is already under a teacher code."""

    pass


class AlreadyEnrolledError(TeacherServiceError):
    """Raised when the profile is already enrolled under the teacher code."""

    pass


@dataclass(frozen=True)
class TeacherIdentity:
    """Resolved teacher values used by other services."""

    id: str
    teacher_code: str
    full_name: str
    email: str | None


class TeacherService:
    """Service for teacher registration and roster management."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.store = RecordStore(db)

    # =========================================================================
    # Resolution
    # =========================================================================

    async def resolve_teacher(self, teacher_id: str) -> TeacherIdentity:
        """Resolve the acting teacher and its code.

        Args:
            teacher_id: Auth principal id of the teacher.

        Returns:
            TeacherIdentity with code and display name.

        Raises:
            TeacherNotFoundError: If there is no teacher or it has no code.
            TransientStoreError: If the store fails.
        """
        teacher = await self.store.find_by_unique_key(Teacher, id=teacher_id)
        if teacher is None or not teacher.teacher_code:
            raise TeacherNotFoundError(f"Teacher {teacher_id} not found")

        profile = await self.store.find_by_unique_key(Profile, id=teacher_id)

        return TeacherIdentity(
            id=teacher.id,
            teacher_code=teacher.teacher_code,
            full_name=profile.full_name if profile else teacher.teacher_code,
            email=profile.email if profile else None,
        )

    async def get_teacher(self, teacher_id: str) -> TeacherResponse:
        """Get the teacher's own record including the teacher code.

        Raises:
            TeacherNotFoundError: If the principal is not a teacher.
        """
        teacher = await self.store.find_by_unique_key(Teacher, id=teacher_id)
        profile = await self.store.find_by_unique_key(Profile, id=teacher_id)
        if teacher is None or profile is None:
            raise TeacherNotFoundError(f"Teacher {teacher_id} not found")
        return self._to_response(teacher, profile)

    # =========================================================================
    # Registration
    # =========================================================================

    async def register_teacher(
        self,
        principal_id: str,
        request: RegisterTeacherRequest,
    ) -> TeacherResponse:
        """Register the principal as a teacher.

        Creates the teacher profile if needed and a Teacher row with a
        fresh ``PROF`` code. Code collisions are retried.

        Args:
            principal_id: Auth principal id.
            request: Registration data.

        Returns:
            The registered teacher.

        Raises:
            TeacherAlreadyExistsError: If already registered.
            ProfileEmailTakenError: If the e-mail belongs to another profile.
            ProfileRoleConflictError: If the principal is a student.
            TeacherCodeExhaustedError: If every generated code collided.
        """
        if await self.store.find_by_unique_key(Teacher, id=principal_id) is not None:
            raise TeacherAlreadyExistsError(f"Teacher {principal_id} already registered")

        profile = await ProfileService(self.db).ensure_profile(
            principal_id=principal_id,
            email=request.email,
            full_name=request.full_name,
            role="teacher",
        )
        full_name = profile.full_name
        email = profile.email
        avatar_url = profile.avatar_url

        for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
            code = generate_teacher_code()
            try:
                teacher = await self.store.insert(
                    Teacher(
                        id=principal_id,
                        teacher_code=code,
                        school_name=request.school_name,
                        subject=request.subject,
                    )
                )
            except ConflictUniqueConstraintError:
                if await self.store.find_by_unique_key(Teacher, id=principal_id) is not None:
                    raise TeacherAlreadyExistsError(
                        f"Teacher {principal_id} already registered"
                    ) from None
                logger.warning("Teacher code collision: code=%s, attempt=%d", code, attempt)
                continue

            logger.info("Registered teacher: id=%s, code=%s", principal_id, code)
            return TeacherResponse(
                id=principal_id,
                full_name=full_name,
                email=email,
                teacher_code=teacher.teacher_code,
                school_name=teacher.school_name,
                subject=teacher.subject,
                avatar_url=avatar_or_fallback(avatar_url, email),
            )

        raise TeacherCodeExhaustedError(
            f"Could not allocate a teacher code after {MAX_CODE_ATTEMPTS} attempts"
        )

    # =========================================================================
    # Roster
    # =========================================================================

    async def list_students(self, teacher_id: str) -> RosterResponse:
        """List the students enrolled under the teacher's code.

        Raises:
            TeacherNotFoundError: If the principal is not a teacher.
        """
        teacher = await self.resolve_teacher(teacher_id)
        return await self._roster(teacher.teacher_code)

    async def list_unassigned_students(self) -> RosterResponse:
        """List self-registered students waiting for a teacher."""
        return await self._roster(UNASSIGNED_TEACHER_CODE)

    async def assign_student(self, teacher_id: str, student_id: str) -> RosterStudent:
        """Move an UNASSIGNED student under the teacher's code.

        Args:
            teacher_id: Acting teacher.
            student_id: Student row id.

        Returns:
            The updated roster entry.

        Raises:
            TeacherNotFoundError: If the principal is not a teacher.
            StudentNotFoundError: If the student row does not exist.
            StudentNotAssignableError: If the student already has a teacher.
            AlreadyEnrolledError: If the profile is already enrolled with this teacher.
        """
        teacher = await self.resolve_teacher(teacher_id)

        student = await self.store.find_by_unique_key(Student, id=student_id)
        if student is None:
            raise StudentNotFoundError(f"Student {student_id} not found")
        if student.teacher_code != UNASSIGNED_TEACHER_CODE:
            raise StudentNotAssignableError(f"Student {student_id} already has a teacher")

        profile_id = student.profile_id
        try:
            student = await self.store.update(student, teacher_code=teacher.teacher_code)
        except ConflictUniqueConstraintError as e:
            raise AlreadyEnrolledError(
                f"Profile {profile_id} is already enrolled with {teacher.teacher_code}"
            ) from e

        profile = await self.store.find_one(Profile, id=profile_id)

        logger.info(
            "Assigned student: student=%s, teacher_code=%s, by=%s",
            student_id,
            teacher.teacher_code,
            teacher_id,
        )

        return self._to_roster_entry(student, profile)

    async def _roster(self, teacher_code: str) -> RosterResponse:
        stmt = (
            select(Student, Profile)
            .join(Profile, Student.profile_id == Profile.id)
            .where(Student.teacher_code == teacher_code)
            .order_by(Profile.full_name)
        )
        rows = await self.store.find_rows(stmt)
        students = [self._to_roster_entry(student, profile) for student, profile in rows]
        return RosterResponse(students=students, total=len(students))

    def _to_roster_entry(self, student: Student, profile: Profile) -> RosterStudent:
        return RosterStudent(
            student_id=student.id,
            profile_id=profile.id,
            full_name=profile.full_name,
            email=profile.email,
            level=student.grade or DEFAULT_STUDENT_LEVEL,
            teacher_code=student.teacher_code,
            is_registered=student.is_registered,
            avatar_url=avatar_or_fallback(profile.avatar_url, profile.email),
            enrolled_at=student.created_at,
        )

    def _to_response(self, teacher: Teacher, profile: Profile) -> TeacherResponse:
        return TeacherResponse(
            id=teacher.id,
            full_name=profile.full_name,
            email=profile.email,
            teacher_code=teacher.teacher_code,
            school_name=teacher.school_name,
            subject=teacher.subject,
            avatar_url=avatar_or_fallback(profile.avatar_url, profile.email),
        )
