"""Error taxonomy raised by services and rendered by the handlers in main.py.

Each error is an HTTPException with a fixed status code so services keep
raising at the point of failure, the same way routes raise HTTPException.
"""
from typing import Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class InvalidOtp(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid or expired OTP"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password"


class PermissionDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed to access this resource"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class ConfigurationError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Server is not configured"


class PersistenceError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"


class UpstreamError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream provider error"

    def __init__(self, provider_status: str, detail: Optional[str] = None):
        self.provider_status = provider_status
        super().__init__(detail or f"Places provider error: {provider_status}")
