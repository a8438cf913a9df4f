import re
from datetime import datetime, date
from typing import Optional, List

from pydantic import EmailStr, Field, field_validator

from globetrotter.core.config import settings
from globetrotter.schemas.common import CamelModel

PHONE_RE = re.compile(r"^[+]?[\d\s-]{8,15}$")


def strip_email(value):
    return value.strip() if isinstance(value, str) else value


def lowercase_email(value: str) -> str:
    # EmailStr only normalises the domain part
    return value.lower()


class UserCreate(CamelModel):
    name: Optional[str] = None
    email: EmailStr
    password: str
    phone_number: Optional[str] = None
    city: Optional[str] = None

    trim_email = field_validator("email", mode="before")(strip_email)
    check_email = field_validator("email")(lowercase_email)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]):
        return v.strip() if v else v

    @field_validator("password")
    @classmethod
    def long_enough(cls, v: str):
        if len(v) < settings.PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")
        return v

    @field_validator("phone_number")
    @classmethod
    def valid_phone(cls, v: Optional[str]):
        if not v:
            return None
        if not PHONE_RE.match(v):
            raise ValueError("Invalid phone number format")
        return v


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    trim_email = field_validator("email", mode="before")(strip_email)
    check_email = field_validator("email")(lowercase_email)


class UserOut(CamelModel):
    id: str
    name: Optional[str] = None
    email: str
    phone_number: Optional[str] = None
    city: Optional[str] = None
    created_at: Optional[datetime] = None


class UserTripSummary(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool
    created_at: Optional[datetime] = None


class UserProfile(UserOut):
    trips: List[UserTripSummary] = []


class SignupResponse(CamelModel):
    message: str
    user: UserOut


class LoginResponse(CamelModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserOut
