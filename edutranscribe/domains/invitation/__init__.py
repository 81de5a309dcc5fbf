# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student invitation domain package."""

from edutranscribe.domains.invitation.service import (
    InvitationAlreadyAcceptedError,
    InvitationNotFoundError,
    InvitationService,
    InvitationServiceError,
)

__all__ = [
    "InvitationService",
    "InvitationServiceError",
    "InvitationNotFoundError",
    "InvitationAlreadyAcceptedError",
]
