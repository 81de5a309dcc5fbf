# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Outbound notifications for EduTranscribe.

Usage:
    from edutranscribe.infrastructure.notifications import get_invitation_notifier

    notifier = get_invitation_notifier(settings)
    result = await notifier.send_invitation(
        "Ana Ruiz", "ana@example.com", invitation_id, "Laura Gómez"
    )
    if not result.succeeded:
        ...
"""

from edutranscribe.infrastructure.notifications.channels import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    DeliveryStatus,
    EmailChannel,
    NotificationPayload,
)
from edutranscribe.infrastructure.notifications.service import (
    InvitationNotifier,
    get_invitation_notifier,
    reset_invitation_notifier,
)

__all__ = [
    "BaseChannel",
    "ChannelResult",
    "ChannelType",
    "DeliveryStatus",
    "EmailChannel",
    "NotificationPayload",
    "InvitationNotifier",
    "get_invitation_notifier",
    "reset_invitation_notifier",
]
