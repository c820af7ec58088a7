from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notevault.api.v1.schemas.note import MessageResponse, NoteListResponse, NoteRead
from notevault.core.schemas.note import NoteCreate, NoteUpdate
from notevault.dependencies import get_current_user, get_note_service

if TYPE_CHECKING:
    from notevault.core.schemas.auth import AuthUser
    from notevault.core.services.note_service import NoteService

router = APIRouter(
    responses={
        401: {"description": "Missing, malformed, forged or expired token"},
        403: {"description": "Note belongs to another user"},
        404: {"description": "Note not found"},
    }
)


@router.post("", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.create_note(payload, user_id=current_user.id)
    return NoteRead.model_validate(note)


@router.get("", response_model=NoteListResponse)
async def list_notes(
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    notes = await service.list_notes(user_id=current_user.id)
    return NoteListResponse(notes=[NoteRead.model_validate(n) for n in notes], count=len(notes))


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.get_note(note_id, user_id=current_user.id)
    return NoteRead.model_validate(note)


@router.put("/{note_id}", response_model=NoteRead)
@router.patch("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Partially update a note; omitted fields keep their current value."""
    note = await service.update_note(note_id, payload, user_id=current_user.id)
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    await service.delete_note(note_id, user_id=current_user.id)
    return MessageResponse(message="deleted")
