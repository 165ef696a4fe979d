# backend/tugas/core/errors.py

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """
    Base for errors a handler reports to the client as {"error": message}.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Required request fields are missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing fields"


class AuthError(AppError):
    """Not authenticated, or bad credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class PersistenceError(AppError):
    """
    A database operation failed. The cause is logged server-side;
    the client only ever sees the generic message.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
