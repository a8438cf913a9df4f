from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Optional, Literal

load_dotenv()


class Settings(BaseSettings):
    # postgresql+asyncpg://... in deployments; sqlite+aiosqlite only for local runs and tests,
    # where timezone-aware columns come back naive
    DATABASE_URL: str

    # Login refuses to issue tokens while this is unset
    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # Mail is logged and skipped when SMTP_HOST is empty
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None

    GOOGLE_PLACES_API_KEY: str = ""
    PLACES_BASE_URL: str = "https://maps.googleapis.com/maps/api/place"
    PLACES_TIMEOUT_SECONDS: float = 10.0

    # Redis settings
    REDIS_URL: str = "redis://localhost:6379/0"
    OTP_BACKEND: Literal["memory", "redis"] = "redis"

    API_PREFIX: str = "/api"
    CREATE_TABLES_ON_STARTUP: bool = True
    CORS_ORIGIN_REGEX: str = r"^(http:\/\/localhost(:\d{1,5})?|http:\/\/127\.0\.0\.1(:\d{1,5})?)$"
    LOG_LEVEL: str = "INFO"

    PROJECT_NAME: str = "GlobeTrotter API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trip planning API: accounts, places search, multi-stop trips"

    PASSWORD_MIN_LENGTH: int = 8
    OTP_TTL_SECONDS: int = 600
    APP_NAME: str = "GlobeTrotter"

    class Config:
        env_file = ".env"


settings = Settings()
