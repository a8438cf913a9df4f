import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Callable

from globetrotter.core.config import settings
from globetrotter.core.logger import logger

EmailSender = Callable[[str, str, str], None]


def send_email_text(to_email: str, subject: str, body: str) -> None:
    if not settings.SMTP_HOST:
        logger.warning(f"SMTP not configured, email to {to_email} not sent: {subject}")
        return

    sender_email = settings.SMTP_USER
    msg = MIMEText(body)
    msg["Subject"] = subject
    msg["From"] = formataddr((settings.APP_NAME, sender_email))
    msg["To"] = to_email

    with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT) as server:
        server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.sendmail(sender_email, [to_email], msg.as_string())


def get_email_sender() -> EmailSender:
    """FastAPI dependency; tests override it to capture outgoing mail."""
    return send_email_text
