from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from globetrotter.core.database import get_db
from globetrotter.core.exceptions import InvalidCredentials
from globetrotter.core.security import decode_access_token
from globetrotter.models.user.user import User

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    credentials_exception = InvalidCredentials(
        "Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if user_id is None or payload.get("type") != "access":
        raise credentials_exception

    result = await db.scalar(select(User).filter(User.id == user_id))
    if result is None:
        raise credentials_exception

    return result
