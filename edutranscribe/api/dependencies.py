# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

Dependencies are used to:
- Get database sessions
- Get the acting principal and enforce its role
- Get service collaborators such as the invitation notifier

Example:
    @router.post("/students")
    async def onboard_student(
        data: OnboardStudentRequest,
        current_user: TeacherUser,
        db: DB,
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from edutranscribe.api.middleware.auth import CurrentUser, get_current_user
from edutranscribe.core.config import get_settings
from edutranscribe.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    get_session,
    get_sessionmaker,
    init_database,
)
from edutranscribe.infrastructure.notifications import (
    InvitationNotifier,
    get_invitation_notifier,
    reset_invitation_notifier,
)

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection and drop cached collaborators."""
    await close_database()
    reset_invitation_notifier()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session.

    Yields:
        AsyncSession bound to the application database.

    Raises:
        HTTPException: 503 if the database has not been initialized.
    """
    try:
        get_sessionmaker()
    except DatabaseError as e:
        logger.error("Database session requested before initialization: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized",
        ) from e

    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def get_optional_user(request: Request) -> CurrentUser | None:
    """Get current principal if authenticated, None otherwise."""
    return get_current_user(request)


def require_auth(request: Request) -> CurrentUser:
    """Require an authenticated principal.

    Raises:
        HTTPException: 401 if not authenticated.
    """
    user = get_current_user(request)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_teacher(request: Request) -> CurrentUser:
    """Require a teacher principal.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not a teacher.
    """
    user = require_auth(request)
    if not user.is_teacher:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Teacher access required",
        )
    return user


def require_student(request: Request) -> CurrentUser:
    """Require a student principal.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not a student.
    """
    user = require_auth(request)
    if not user.is_student:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student access required",
        )
    return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_notifier() -> InvitationNotifier:
    """Get the invitation notifier singleton."""
    return get_invitation_notifier(get_settings())


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
OptionalUser = Annotated[CurrentUser | None, Depends(get_optional_user)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
TeacherUser = Annotated[CurrentUser, Depends(require_teacher)]
StudentUser = Annotated[CurrentUser, Depends(require_student)]
Notifier = Annotated[InvitationNotifier, Depends(get_notifier)]
