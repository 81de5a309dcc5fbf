# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class calendar API endpoints.

- GET / - List the teacher's classes
- POST / - Book a class
- PATCH /{class_id} - Update a class
- DELETE /{class_id} - Delete a class
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from edutranscribe.api.dependencies import DB, TeacherUser
from edutranscribe.domains.class_ import (
    ClassBookingFailedError,
    ClassNotFoundError,
    ClassService,
)
from edutranscribe.domains.teacher import TeacherNotFoundError, TeacherService
from edutranscribe.models.class_ import (
    BookClassRequest,
    ClassListResponse,
    ClassResponse,
    UpdateClassRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=ClassListResponse,
    summary="List classes",
)
async def list_classes(current_user: TeacherUser, db: DB) -> ClassListResponse:
    """List the acting teacher's classes ordered by date and time."""
    return await ClassService(db).list_classes(current_user.id)


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a class",
)
async def create_class(
    data: BookClassRequest,
    current_user: TeacherUser,
    db: DB,
) -> ClassResponse:
    """Book a class in the acting teacher's calendar."""
    try:
        await TeacherService(db).resolve_teacher(current_user.id)
        return await ClassService(db).create_class(current_user.id, data)
    except TeacherNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ClassBookingFailedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


@router.patch(
    "/{class_id}",
    response_model=ClassResponse,
    summary="Update a class",
    description="Only the fields present in the body are changed.",
)
async def update_class(
    class_id: str,
    data: UpdateClassRequest,
    current_user: TeacherUser,
    db: DB,
) -> ClassResponse:
    """Apply a partial update to one of the teacher's classes."""
    try:
        return await ClassService(db).update_class(current_user.id, class_id, data)
    except ClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete(
    "/{class_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a class",
)
async def delete_class(class_id: str, current_user: TeacherUser, db: DB) -> Response:
    """Delete one of the teacher's classes."""
    try:
        await ClassService(db).delete_class(current_user.id, class_id)
    except ClassNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
