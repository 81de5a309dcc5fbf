# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student invitation API endpoints.

- GET / - List the teacher's invitations
- POST /{invitation_id}/resend - Re-send a pending invitation
- POST /{invitation_id}/accept - Accept an invitation as the invitee
"""

import logging

from fastapi import APIRouter, HTTPException, Query, status

from edutranscribe.api.dependencies import DB, AuthenticatedUser, Notifier, TeacherUser
from edutranscribe.domains.invitation import (
    InvitationAlreadyAcceptedError,
    InvitationNotFoundError,
    InvitationService,
)
from edutranscribe.domains.profiles import ProfileEmailTakenError, ProfileRoleConflictError
from edutranscribe.domains.teacher import TeacherNotFoundError
from edutranscribe.models.invitation import InvitationListResponse, ResendInvitationResponse
from edutranscribe.models.student import EnrollmentInfo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=InvitationListResponse,
    summary="List invitations",
)
async def list_invitations(
    current_user: TeacherUser,
    db: DB,
    pending_only: bool = Query(False, description="Only invitations not yet accepted"),
) -> InvitationListResponse:
    """List invitations created by the acting teacher, newest first."""
    return await InvitationService(db).list_invitations(current_user.id, pending_only)


@router.post(
    "/{invitation_id}/resend",
    response_model=ResendInvitationResponse,
    summary="Re-send invitation e-mail",
)
async def resend_invitation(
    invitation_id: str,
    current_user: TeacherUser,
    db: DB,
    notifier: Notifier,
) -> ResendInvitationResponse:
    """Send a pending invitation e-mail again."""
    service = InvitationService(db, notifier=notifier)

    try:
        return await service.resend_invitation(current_user.id, invitation_id)
    except (TeacherNotFoundError, InvitationNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except InvitationAlreadyAcceptedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e


@router.post(
    "/{invitation_id}/accept",
    response_model=EnrollmentInfo,
    summary="Accept invitation",
    description="Register the invitee as a student of the inviting teacher.",
)
async def accept_invitation(
    invitation_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> EnrollmentInfo:
    """Accept an invitation on behalf of the authenticated principal."""
    try:
        return await InvitationService(db).accept_invitation(current_user.id, invitation_id)
    except (InvitationNotFoundError, TeacherNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except (
        InvitationAlreadyAcceptedError,
        ProfileEmailTakenError,
        ProfileRoleConflictError,
    ) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
