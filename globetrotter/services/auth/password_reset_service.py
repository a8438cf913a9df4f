import secrets
import smtplib
import string

from sqlalchemy.ext.asyncio import AsyncSession

from globetrotter.core.config import settings
from globetrotter.core.exceptions import InvalidOtp
from globetrotter.core.logger import logger
from globetrotter.core.security import hash_password
from globetrotter.services.auth.auth import find_user_by_email
from globetrotter.services.auth.otp_store import OtpStore
from globetrotter.services.email_service import EmailSender

OTP_TTL = settings.OTP_TTL_SECONDS
RESET_ACK = "If this email is registered, an OTP has been sent."


def _generate_otp(length: int = 6) -> str:
    return ''.join(secrets.choice(string.digits) for _ in range(length))


async def request_password_reset(
    db: AsyncSession,
    store: OtpStore,
    send_email: EmailSender,
    email: str,
) -> None:
    user = await find_user_by_email(db, email)
    if not user:
        return

    otp = _generate_otp()
    await store.put(user.email, otp, OTP_TTL)

    subject = f"{settings.APP_NAME} Password Reset Code"
    body = (
        f"Hi {user.name or user.email},\n\n"
        f"Your OTP is: {otp}\nExpires in {OTP_TTL // 60} minutes."
    )
    try:
        send_email(user.email, subject, body)
    except (smtplib.SMTPException, OSError):
        # the response stays identical to the unknown-email case
        logger.exception(f"Password reset email to user {user.id} failed")
        return
    logger.info(f"Password reset OTP issued for user {user.id}")


async def reset_password_with_otp(
    db: AsyncSession,
    store: OtpStore,
    email: str,
    otp: str,
    new_password: str,
) -> None:
    if not await store.consume(email, otp):
        raise InvalidOtp()

    user = await find_user_by_email(db, email)
    if not user:
        raise InvalidOtp()

    user.hashed_password = hash_password(new_password)
    await db.commit()
    logger.info(f"Password reset for user {user.id}")
