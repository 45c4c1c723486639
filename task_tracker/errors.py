"""Domain errors raised by services and rendered by the API layer."""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class TaskTrackerError(Exception):
    """Base class for business-rule failures. Never retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TaskTrackerError):
    """Referenced task or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(TaskTrackerError):
    """Caller is authenticated but not permitted to act on the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class BadRequestError(TaskTrackerError):
    """Business rule violation not covered by field validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(TaskTrackerError):
    status_code = status.HTTP_401_UNAUTHORIZED


async def task_tracker_error_handler(_: Request, exc: TaskTrackerError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)
