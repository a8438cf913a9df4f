from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from globetrotter.core.database import get_db
from globetrotter.dependencies.otp import get_otp_store
from globetrotter.schemas.auth.password_reset import ForgotPasswordRequest, ResetPasswordRequest
from globetrotter.schemas.common import MessageResponse
from globetrotter.services.auth.otp_store import OtpStore
from globetrotter.services.auth.password_reset_service import (
    RESET_ACK, request_password_reset, reset_password_with_otp,
)
from globetrotter.services.email_service import EmailSender, get_email_sender

router = APIRouter(prefix="/users", tags=["Password reset"])


@router.post("/forgot-password-otp", response_model=MessageResponse)
async def forgot_password(
    payload: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_db),
    store: OtpStore = Depends(get_otp_store),
    send_email: EmailSender = Depends(get_email_sender),
):
    await request_password_reset(db, store, send_email, payload.email)
    return MessageResponse(message=RESET_ACK)


@router.post("/reset-password-otp", response_model=MessageResponse)
async def reset_password(
    payload: ResetPasswordRequest,
    db: AsyncSession = Depends(get_db),
    store: OtpStore = Depends(get_otp_store),
):
    await reset_password_with_otp(db, store, payload.email, payload.otp, payload.new_password)
    return MessageResponse(message="Password reset successful. Please log in.")
