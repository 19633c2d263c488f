"""Outbound email delivery over SMTP."""

import logging

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema

from bluestar.config import Settings, get_settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending transactional email."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.config = ConnectionConfig(
            MAIL_USERNAME=self.settings.smtp_user or "",
            MAIL_PASSWORD=self.settings.smtp_password or "",
            MAIL_FROM=self.settings.mail_from,
            MAIL_FROM_NAME=self.settings.mail_from_name,
            MAIL_PORT=self.settings.smtp_port,
            MAIL_SERVER=self.settings.smtp_host,
            MAIL_STARTTLS=self.settings.smtp_port != 465,
            MAIL_SSL_TLS=self.settings.smtp_port == 465,
            USE_CREDENTIALS=bool(self.settings.smtp_user),
            SUPPRESS_SEND=int(self.settings.mail_suppress_send),
        )

    async def send_email(self, to: str, subject: str, body: str) -> None:
        """Send a plain-text email. Delivery errors propagate to the caller."""
        message = MessageSchema(subject=subject, recipients=[to], body=body, subtype="plain")
        await FastMail(self.config).send_message(message)
        logger.info(f"Sent '{subject}' email to {to}")

    async def send_otp(self, to: str, otp: str) -> None:
        """Send a one-time password."""
        await self.send_email(to, "Your One Time Password", f"Your one-time password is: {otp}")


def get_email_service() -> EmailService:
    """Get email service instance."""
    return EmailService()
