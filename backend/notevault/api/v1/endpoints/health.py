from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from notevault.config import APP_VERSION
from notevault.core.models.base import utcnow
from notevault.dependencies import get_credential_repository, get_note_repository, get_settings

if TYPE_CHECKING:
    from notevault.config import Settings
    from notevault.core.repositories.credential_repository import CredentialRepository
    from notevault.core.repositories.note_repository import NoteRepository

router = APIRouter()


@router.get("")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ok",
            "service": "notevault-api",
            "version": APP_VERSION,
            "time": utcnow().isoformat(timespec="seconds"),
        }
    )


@router.get("/ready")
async def readiness_check(
    credentials: CredentialRepository = Depends(get_credential_repository),
    notes: NoteRepository = Depends(get_note_repository),
    settings: Settings = Depends(get_settings),
):
    """Readiness check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "users": credentials.count(),
            "notes": notes.count(),
            "api_prefix": settings.api_prefix,
        }
    )
