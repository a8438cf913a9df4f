from pydantic import EmailStr, Field, field_validator

from globetrotter.core.config import settings
from globetrotter.schemas.common import CamelModel
from globetrotter.schemas.user.user import lowercase_email, strip_email


class ForgotPasswordRequest(CamelModel):
    email: EmailStr

    trim_email = field_validator("email", mode="before")(strip_email)
    check_email = field_validator("email")(lowercase_email)


class ResetPasswordRequest(CamelModel):
    email: EmailStr
    otp: str = Field(..., min_length=1)
    new_password: str

    trim_email = field_validator("email", mode="before")(strip_email)
    check_email = field_validator("email")(lowercase_email)

    @field_validator("otp")
    @classmethod
    def strip_otp(cls, v: str):
        return v.strip()

    @field_validator("new_password")
    @classmethod
    def strong_enough(cls, v: str):
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters")
        return v
