from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, field_validator

from globetrotter.schemas.common import CamelModel
from globetrotter.schemas.user.user import lowercase_email, strip_email


class ShareCreate(CamelModel):
    email: EmailStr
    permission: Literal["view", "edit"] = "view"

    trim_email = field_validator("email", mode="before")(strip_email)
    check_email = field_validator("email")(lowercase_email)


class ShareResponse(CamelModel):
    id: str
    trip_id: str
    email: str
    permission: str
    created_at: Optional[datetime] = None
