from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import status
from fastapi.responses import JSONResponse

from notevault.core.errors import (
    AlreadyExistsError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    NoteVaultError,
    TokenError,
    ValidationError,
    WrongCredentialError,
)
from notevault.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)

STATUS_BY_ERROR: dict[type[NoteVaultError], int] = {
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    WrongCredentialError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    TokenError: status.HTTP_401_UNAUTHORIZED,
    ValidationError: status.HTTP_400_BAD_REQUEST,
}


def status_for(exc: NoteVaultError) -> int:
    for error_type in type(exc).__mro__:
        if error_type in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[error_type]
    return status.HTTP_400_BAD_REQUEST


async def notevault_error_handler(request: Request, exc: NoteVaultError) -> JSONResponse:
    """Translate an expected core error into its HTTP response."""
    status_code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "code": exc.code},
        headers=headers,
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle defects and anything else nobody expected."""
    logger.error(
        "Unexpected error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "code": "internal"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NoteVaultError, notevault_error_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
