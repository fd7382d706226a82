from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib
import structlog

from app.core.config import Settings, settings
from app.core.constants import PASSWORD_RESET_PATH
from app.core.exceptions import ExternalServiceError

logger = structlog.get_logger(__name__)


@dataclass
class EmailMessage:
    to: str
    subject: str
    body_html: str
    body_text: str


class EmailService(ABC):
    @abstractmethod
    async def send_email(self, message: EmailMessage) -> None:
        """Deliver the message or raise ExternalServiceError."""


class ConsoleEmailService(EmailService):
    async def send_email(self, message: EmailMessage) -> None:
        print("\n" + "=" * 80)
        print("EMAIL (Console Output - Development Mode)")
        print("=" * 80)
        print(f"To: {message.to}")
        print(f"Subject: {message.subject}")
        print("-" * 80)
        print("Text Body:")
        print(message.body_text)
        print("=" * 80 + "\n")


class SMTPEmailService(EmailService):
    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        username: str,
        password: str,
        from_email: str,
        from_name: str,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        self.password = password
        self.from_email = from_email
        self.from_name = from_name

    async def send_email(self, message: EmailMessage) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = message.to

        msg.attach(MIMEText(message.body_text, "plain"))
        msg.attach(MIMEText(message.body_html, "html"))

        try:
            await aiosmtplib.send(
                msg,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.username or None,
                password=self.password or None,
                start_tls=True,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("smtp_send_failed", host=self.smtp_host, error=str(e))
            raise ExternalServiceError("Failed to send email", service="smtp") from e

        logger.info("email_sent", subject=message.subject)


def get_email_service() -> EmailService:
    if settings.EMAIL_BACKEND == "smtp":
        return SMTPEmailService(
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            from_email=settings.SMTP_FROM_EMAIL,
            from_name=settings.SMTP_FROM_NAME,
        )
    return ConsoleEmailService()


def build_reset_url(token: str, config: Settings | None = None) -> str:
    config = config or settings
    return f"{config.APP_BASE_URL.rstrip('/')}{PASSWORD_RESET_PATH}?token={token}"


def build_password_reset_email(
    email: str, token: str, config: Settings | None = None
) -> EmailMessage:
    config = config or settings
    reset_url = build_reset_url(token, config)
    hours = config.PASSWORD_RESET_TOKEN_EXPIRE_HOURS
    expiry_text = "1 hour" if hours == 1 else f"{hours} hours"

    body_html = f"""\
<!DOCTYPE html>
<html>
<head>
  <title>Password Reset - Advice Globe</title>
</head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #333;">Password Reset Request</h2>
  <p>You have requested to reset your password for Advice Globe.</p>
  <p>Click the link below to reset your password:</p>
  <a href="{reset_url}"
     style="display: inline-block; background-color: #007bff; color: white; padding: 10px 20px;
            text-decoration: none; border-radius: 5px; margin: 10px 0;">
    Reset Password
  </a>
  <p>If you did not request this password reset, please ignore this email.</p>
  <p>This link will expire in {expiry_text} for security reasons.</p>
  <br>
  <p>Best regards,<br>Advice Globe Team</p>
</body>
</html>"""

    body_text = f"""\
Password Reset Request

You have requested to reset your password for Advice Globe.

Visit this link to reset your password: {reset_url}

If you did not request this password reset, please ignore this email.

This link will expire in {expiry_text} for security reasons.

Best regards,
Advice Globe Team"""

    return EmailMessage(
        to=email,
        subject="Password Reset - Advice Globe",
        body_html=body_html,
        body_text=body_text,
    )
