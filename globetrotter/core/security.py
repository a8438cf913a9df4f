from passlib.context import CryptContext
from jose import jwt
from datetime import datetime, timedelta, timezone
from globetrotter.core.config import settings
from globetrotter.core.exceptions import ConfigurationError
import uuid

# argon2 is memory-hard; "deprecated=auto" lets old hashes be upgraded later
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def require_secret() -> str:
    if not settings.JWT_SECRET_KEY:
        raise ConfigurationError("JWT secret not configured")
    return settings.JWT_SECRET_KEY


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    secret = require_secret()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    )
    to_encode.update({"exp": expire, "jti": str(uuid.uuid4()), "type": "access"})
    return jwt.encode(to_encode, secret, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a token; raises jose.JWTError when invalid or expired."""
    return jwt.decode(token, require_secret(), algorithms=[settings.JWT_ALGORITHM])
