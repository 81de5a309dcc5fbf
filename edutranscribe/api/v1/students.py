# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student API endpoints.

- POST /register - Self-register as a student
- GET /me - Get own profile, enrollments and classes
"""

import logging

from fastapi import APIRouter, HTTPException, status

from edutranscribe.api.dependencies import DB, AuthenticatedUser, StudentUser
from edutranscribe.domains.profiles import (
    ProfileEmailTakenError,
    ProfileNotFoundError,
    ProfileRoleConflictError,
)
from edutranscribe.domains.student import StudentAlreadyRegisteredError, StudentService
from edutranscribe.models.student import (
    EnrollmentInfo,
    RegisterStudentRequest,
    StudentProfileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=EnrollmentInfo,
    status_code=status.HTTP_201_CREATED,
    summary="Register as student",
    description=(
        "Create the student profile and enroll it under a teacher code. "
        "Without a known code the student is left UNASSIGNED."
    ),
)
async def register_student(
    data: RegisterStudentRequest,
    current_user: AuthenticatedUser,
    db: DB,
) -> EnrollmentInfo:
    """Self-register the authenticated principal as a student."""
    try:
        return await StudentService(db).register_student(current_user.id, data)
    except (
        StudentAlreadyRegisteredError,
        ProfileEmailTakenError,
        ProfileRoleConflictError,
    ) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.get(
    "/me",
    response_model=StudentProfileResponse,
    summary="Get own student profile",
)
async def get_me(current_user: StudentUser, db: DB) -> StudentProfileResponse:
    """Get the acting student's profile, enrollments and classes."""
    try:
        return await StudentService(db).get_own_profile(current_user.id)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
