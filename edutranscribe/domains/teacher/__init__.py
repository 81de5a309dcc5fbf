# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher domain package.

- Teacher registration and teacher code generation
- Roster listing and assignment of UNASSIGNED students
"""

from edutranscribe.domains.teacher.service import (
    DEFAULT_STUDENT_LEVEL,
    AlreadyEnrolledError,
    StudentNotAssignableError,
    StudentNotFoundError,
    TeacherAlreadyExistsError,
    TeacherCodeExhaustedError,
    TeacherIdentity,
    TeacherNotFoundError,
    TeacherService,
    TeacherServiceError,
    generate_teacher_code,
)

__all__ = [
    "TeacherService",
    "TeacherServiceError",
    "TeacherNotFoundError",
    "TeacherAlreadyExistsError",
    "TeacherCodeExhaustedError",
    "StudentNotFoundError",
    "StudentNotAssignableError",
    "AlreadyEnrolledError",
    "TeacherIdentity",
    "generate_teacher_code",
    "DEFAULT_STUDENT_LEVEL",
]
