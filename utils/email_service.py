# utils/email_service.py

import logging

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType

from core.config import Settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.conf = ConnectionConfig(
            MAIL_USERNAME=settings.MAIL_USERNAME,
            MAIL_PASSWORD=settings.MAIL_PASSWORD,
            MAIL_FROM=settings.MAIL_FROM,
            MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
            MAIL_PORT=settings.MAIL_PORT,
            MAIL_SERVER=settings.MAIL_SERVER,
            MAIL_STARTTLS=settings.MAIL_STARTTLS,
            MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
            USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
            VALIDATE_CERTS=True,
        )

    async def _send(self, email: str, subject: str, body: str):
        message = MessageSchema(
            subject=subject,
            recipients=[email],
            body=body,
            subtype=MessageType.plain,
        )
        fm = FastMail(self.conf)
        await fm.send_message(message)

    async def send_verification_email(self, email: str, token: str, first_name: str):
        link = f"{self.settings.FRONTEND_URL}/verify-email/{token}"
        body = (
            f"Hi {first_name},\n\n"
            f"Please verify your email address by opening the link below:\n{link}\n\n"
            "The link expires in 24 hours."
        )
        await self._send(email, "Verify your email address", body)

    async def send_password_reset_email(self, email: str, token: str, first_name: str):
        link = f"{self.settings.FRONTEND_URL}/reset-password/{token}"
        body = (
            f"Hi {first_name},\n\n"
            f"We received a request to reset your password. Open the link below to choose a new one:\n{link}\n\n"
            "The link expires in 1 hour. If you did not request a reset, you can ignore this email."
        )
        await self._send(email, "Reset your password", body)


async def dispatch_email(send, email: str, *args):
    """Background-task wrapper: a failed send is logged, never raised to the client."""
    try:
        await send(email, *args)
        logger.info(f"Email sent to {email} via {send.__name__}")
    except Exception:
        logger.exception(f"Failed to send {send.__name__} to {email}")
