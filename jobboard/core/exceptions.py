"""
Error taxonomy shared by controllers and services.

Every error is an HTTPException so FastAPI can short-circuit a request from
any layer; the handler registered in main.py renders them as
``{"error": <message>, ...extra}``.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from jobboard.core.config import settings


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, extra: Optional[Dict[str, Any]] = None, headers=None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )
        self.extra = extra or {}


class UnauthenticatedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class AlreadyAppliedError(ConflictError):
    default_message = "Already applied for this job"


class CapacityExceededError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Applications are closed for this job (capacity reached)."


class ProfileIncompleteError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, completion_percent: int, message: Optional[str] = None):
        message = message or (
            f"Complete at least {settings.JOB_POSTING_MIN_COMPLETION}% of your profile before posting jobs."
        )
        super().__init__(message, extra={"completionPercent": completion_percent})
        self.completion_percent = completion_percent


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
