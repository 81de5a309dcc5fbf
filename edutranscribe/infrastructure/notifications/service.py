# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation notifier.

Composes the student invitation e-mail and hands it to a delivery
channel. Delivery problems never escape send_invitation(): they come back
as a FAILED or SKIPPED ChannelResult so onboarding can record a warning
and still succeed.
"""

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

from edutranscribe.infrastructure.notifications.channels import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    DeliveryStatus,
    EmailChannel,
    NotificationPayload,
)
from edutranscribe.utils.datetime import utc_now

if TYPE_CHECKING:
    from edutranscribe.core.config.settings import Settings

logger = logging.getLogger(__name__)

INVITATION_NOTIFICATION_TYPE = "student_invitation"


class InvitationNotifier:
    """Sends registration invitations to students without a profile.

    Attributes:
        channel: Delivery channel, e-mail in deployment.
        registration_base_url: Web client URL the invitation link points to.
    """

    def __init__(self, channel: BaseChannel, registration_base_url: str) -> None:
        self.channel = channel
        self.registration_base_url = registration_base_url.rstrip("/")

    def build_registration_url(self, invitation_id: str) -> str:
        """Build the link that lets the invitee complete registration."""
        return f"{self.registration_base_url}/auth?{urlencode({'invitation': invitation_id})}"

    def build_payload(
        self,
        student_name: str,
        student_email: str,
        invitation_id: str,
        teacher_name: str,
    ) -> NotificationPayload:
        """Compose the invitation message."""
        return NotificationPayload(
            notification_type=INVITATION_NOTIFICATION_TYPE,
            title=f"Invitación para unirte a la clase de {teacher_name}",
            message=(
                f"El profesor {teacher_name} te ha invitado a unirte a su clase en EduTranscribe."
            ),
            recipient_email=student_email,
            recipient_name=student_name,
            action_url=self.build_registration_url(invitation_id),
            action_label="Completar mi Registro",
            highlights=[
                "Crear tu contraseña",
                "Acceder a tus clases programadas",
                "Ver tu perfil de estudiante",
            ],
            footer="Si no esperabas esta invitación, puedes ignorar este correo.",
            data={"invitation_id": invitation_id},
        )

    async def send_invitation(
        self,
        student_name: str,
        student_email: str,
        invitation_id: str,
        teacher_name: str,
    ) -> ChannelResult:
        """Send the invitation e-mail.

        Args:
            student_name: Invitee display name.
            student_email: Invitee address.
            invitation_id: StudentInvitation id embedded in the link.
            teacher_name: Inviting teacher's name, used in the subject.

        Returns:
            ChannelResult. SENT on success, FAILED or SKIPPED otherwise.
        """
        payload = self.build_payload(student_name, student_email, invitation_id, teacher_name)

        try:
            result = await self.channel.send(payload)
        except Exception as e:
            logger.error(
                "Invitation channel raised for invitation=%s: %s",
                invitation_id,
                str(e),
                exc_info=True,
            )
            return ChannelResult(
                channel=ChannelType.EMAIL,
                status=DeliveryStatus.FAILED,
                error_message=str(e),
                sent_at=utc_now(),
            )

        logger.info(
            "Invitation notification: invitation=%s, status=%s",
            invitation_id,
            result.status.value,
        )
        return result


# Singleton instance management
_notifier_instance: InvitationNotifier | None = None


def get_invitation_notifier(settings: "Settings") -> InvitationNotifier:
    """Get or create the invitation notifier singleton.

    Args:
        settings: Application settings.

    Returns:
        InvitationNotifier backed by an EmailChannel.
    """
    global _notifier_instance
    if _notifier_instance is None:
        _notifier_instance = InvitationNotifier(
            channel=EmailChannel(settings.smtp),
            registration_base_url=settings.invitation.registration_base_url,
        )
    return _notifier_instance


def reset_invitation_notifier() -> None:
    """Drop the cached notifier so the next call rebuilds it from settings."""
    global _notifier_instance
    _notifier_instance = None
