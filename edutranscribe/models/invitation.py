# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student invitation models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from edutranscribe.infrastructure.notifications import DeliveryStatus


class InvitationResponse(BaseModel):
    """A student invitation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    teacher_id: str
    student_name: str
    student_email: str
    student_level: str | None = None
    is_accepted: bool
    accepted_at: datetime | None = None
    created_at: datetime


class InvitationListResponse(BaseModel):
    """List of invitations."""

    invitations: list[InvitationResponse]
    total: int


class ResendInvitationResponse(BaseModel):
    """Outcome of re-sending an invitation e-mail."""

    invitation_id: str
    delivery_status: DeliveryStatus
    error_message: str | None = None
