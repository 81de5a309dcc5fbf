# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Email notification channel using async SMTP.

Sends multipart messages (plain text and HTML) with aiosmtplib.

Configuration comes from SMTPSettings (SMTP_HOST, SMTP_PORT,
SMTP_USERNAME, SMTP_PASSWORD, SMTP_USE_TLS, SMTP_FROM_EMAIL,
SMTP_FROM_NAME). With no SMTP_HOST the channel skips every send.
"""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from html import escape

import aiosmtplib

from edutranscribe.core.config.settings import SMTPSettings
from edutranscribe.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    NotificationPayload,
)


class EmailChannel(BaseChannel):
    """Email notification channel using async SMTP."""

    def __init__(self, settings: SMTPSettings) -> None:
        super().__init__()
        self._settings = settings

    @property
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        return ChannelType.EMAIL

    @property
    def is_configured(self) -> bool:
        """True when an SMTP host is set."""
        return self._settings.is_configured

    async def send(self, payload: NotificationPayload) -> ChannelResult:
        """Send email notification via SMTP.

        Args:
            payload: The notification payload.

        Returns:
            ChannelResult with delivery status.
        """
        if not self.is_configured:
            self.logger.warning(
                "Email not sent to %s: SMTP_HOST not set",
                payload.recipient_email,
            )
            return self.create_skipped_result("Email channel not configured")

        if not payload.recipient_email:
            return self.create_skipped_result("No recipient email address")

        message = self._build_email_message(payload)

        try:
            await aiosmtplib.send(
                message,
                hostname=self._settings.host,
                port=self._settings.port,
                username=self._settings.username or None,
                password=self._settings.password.get_secret_value() or None,
                start_tls=self._settings.use_tls,
                timeout=self._settings.timeout,
            )
        except Exception as e:
            self.logger.error(
                "Failed to send email to %s: %s",
                payload.recipient_email,
                str(e),
                exc_info=True,
            )
            return self.create_failure_result(
                f"SMTP error: {str(e)}",
                metadata={"recipient": payload.recipient_email},
            )

        self.logger.info("Email sent to %s: %s", payload.recipient_email, payload.title)

        return self.create_success_result(
            message_id=message["Message-ID"],
            metadata={"recipient": payload.recipient_email},
        )

    def _build_email_message(self, payload: NotificationPayload) -> MIMEMultipart:
        """Build the MIME message with plain text and HTML parts."""
        message = MIMEMultipart("alternative")

        message["From"] = formataddr((self._settings.from_name, self._settings.from_email))
        message["To"] = payload.recipient_email
        message["Subject"] = payload.title
        message["Message-ID"] = make_msgid(domain=self._settings.from_email.rpartition("@")[2] or None)

        message.attach(MIMEText(self._build_plain_text(payload), "plain", "utf-8"))
        message.attach(MIMEText(self._build_html(payload), "html", "utf-8"))

        return message

    def _build_plain_text(self, payload: NotificationPayload) -> str:
        lines = [payload.title, "=" * len(payload.title), ""]

        if payload.recipient_name:
            lines.extend([f"Hola {payload.recipient_name},", ""])

        lines.extend([payload.message, ""])

        if payload.action_url:
            action_text = payload.action_label or "Abrir"
            lines.extend([f"{action_text}: {payload.action_url}", ""])

        for highlight in payload.highlights:
            lines.append(f"- {highlight}")
        if payload.highlights:
            lines.append("")

        if payload.footer:
            lines.extend(["---", payload.footer])

        return "\n".join(lines)

    def _build_html(self, payload: NotificationPayload) -> str:
        title = escape(payload.title)
        message = "".join(
            f'<p style="margin: 0 0 16px 0;">{escape(paragraph).replace(chr(10), "<br>")}</p>'
            for paragraph in payload.message.split("\n\n")
        )

        greeting = ""
        if payload.recipient_name:
            greeting = f'<p style="margin: 0 0 16px 0;">Hola <strong>{escape(payload.recipient_name)}</strong>,</p>'

        action_block = ""
        if payload.action_url:
            url = escape(payload.action_url, quote=True)
            label = escape(payload.action_label or "Abrir")
            action_block = f"""
            <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
                <p style="margin: 0; text-align: center;">
                    <a href="{url}"
                       style="background-color: #2563eb; color: white; padding: 12px 24px;
                              text-decoration: none; border-radius: 6px;
                              display: inline-block; font-weight: bold;">
                        {label}
                    </a>
                </p>
            </div>
            <p style="color: #6b7280; font-size: 14px;">
                <span style="word-break: break-all;">{url}</span>
            </p>
            """

        highlights = ""
        if payload.highlights:
            items = "".join(f"<li>{escape(item)}</li>" for item in payload.highlights)
            highlights = f"<ul>{items}</ul>"

        footer = ""
        if payload.footer:
            footer = f"""
            <p style="color: #6b7280; font-size: 12px; margin-top: 20px; text-align: center;">
                {escape(payload.footer)}
            </p>
            """

        html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; color: #1F2937; margin: 0; padding: 0;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #2563eb; text-align: center;">{title}</h1>
        {greeting}
        {message}
        {action_block}
        {highlights}
        {footer}
    </div>
</body>
</html>
        """

        return html.strip()
