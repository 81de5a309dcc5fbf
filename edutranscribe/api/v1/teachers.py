# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher API endpoints.

- POST / - Register the principal as a teacher
- GET /me - Get own teacher record and code
- GET /me/students - List enrolled students
- GET /me/students/unassigned - List students without a teacher
- POST /me/students/{student_id}/assign - Claim an unassigned student
"""

import logging

from fastapi import APIRouter, HTTPException, status

from edutranscribe.api.dependencies import DB, AuthenticatedUser, TeacherUser
from edutranscribe.domains.profiles import ProfileEmailTakenError, ProfileRoleConflictError
from edutranscribe.domains.teacher import (
    AlreadyEnrolledError,
    StudentNotAssignableError,
    StudentNotFoundError,
    TeacherAlreadyExistsError,
    TeacherCodeExhaustedError,
    TeacherNotFoundError,
    TeacherService,
)
from edutranscribe.models.teacher import (
    RegisterTeacherRequest,
    RosterResponse,
    RosterStudent,
    TeacherResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=TeacherResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as teacher",
    description="Create the teacher profile and allocate a teacher code.",
)
async def register_teacher(
    data: RegisterTeacherRequest,
    current_user: AuthenticatedUser,
    db: DB,
) -> TeacherResponse:
    """Register the authenticated principal as a teacher."""
    service = TeacherService(db)

    try:
        return await service.register_teacher(current_user.id, data)
    except (TeacherAlreadyExistsError, ProfileEmailTakenError, ProfileRoleConflictError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except TeacherCodeExhaustedError as e:
        logger.error("Teacher code allocation failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not allocate a teacher code, please retry",
        ) from e


@router.get(
    "/me",
    response_model=TeacherResponse,
    summary="Get own teacher record",
)
async def get_me(current_user: TeacherUser, db: DB) -> TeacherResponse:
    """Get the acting teacher including its teacher code."""
    try:
        return await TeacherService(db).get_teacher(current_user.id)
    except TeacherNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get(
    "/me/students",
    response_model=RosterResponse,
    summary="List enrolled students",
)
async def list_students(current_user: TeacherUser, db: DB) -> RosterResponse:
    """List students enrolled under the teacher's code."""
    try:
        return await TeacherService(db).list_students(current_user.id)
    except TeacherNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get(
    "/me/students/unassigned",
    response_model=RosterResponse,
    summary="List unassigned students",
)
async def list_unassigned_students(current_user: TeacherUser, db: DB) -> RosterResponse:
    """List self-registered students waiting for a teacher."""
    return await TeacherService(db).list_unassigned_students()


@router.post(
    "/me/students/{student_id}/assign",
    response_model=RosterStudent,
    summary="Assign an unassigned student",
)
async def assign_student(student_id: str, current_user: TeacherUser, db: DB) -> RosterStudent:
    """Move an unassigned student under the teacher's code."""
    try:
        return await TeacherService(db).assign_student(current_user.id, student_id)
    except (TeacherNotFoundError, StudentNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except (StudentNotAssignableError, AlreadyEnrolledError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
