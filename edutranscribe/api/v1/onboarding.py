# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student onboarding API endpoint.

- POST /students - Onboard a student under the acting teacher
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from edutranscribe.api.dependencies import DB, Notifier, TeacherUser
from edutranscribe.api.middleware.rate_limit import RATE_LIMIT_ONBOARDING, limiter
from edutranscribe.domains.onboarding import (
    DuplicateEnrollmentError,
    OnboardingService,
    TeacherNotFoundError,
)
from edutranscribe.models.onboarding import OnboardingOutcome, OnboardStudentRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/students",
    response_model=OnboardingOutcome,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard a student",
    description=(
        "Enroll an existing profile under the teacher's code, or create a "
        "pending invitation and e-mail it. Optionally books a first class. "
        "Class booking and e-mail failures are reported as warnings."
    ),
)
@limiter.limit(RATE_LIMIT_ONBOARDING)
async def onboard_student(
    request: Request,
    data: OnboardStudentRequest,
    current_user: TeacherUser,
    db: DB,
    notifier: Notifier,
) -> OnboardingOutcome:
    """Onboard a student for the authenticated teacher."""
    service = OnboardingService(db=db, notifier=notifier)

    try:
        return await service.onboard_student(current_user.id, data)
    except TeacherNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except DuplicateEnrollmentError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
