from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from notevault.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from notevault.core.models.note import Note
    from notevault.core.repositories.note_repository import NoteRepository
    from notevault.core.schemas.note import NoteCreate, NoteUpdate


logger = get_logger(__name__)


class NoteService:
    """Service for managing notes with user-scoped access.

    Ownership is enforced by the repository; errors it raises
    (``NotFoundError``, ``ForbiddenError``, ``ValidationError``) pass
    through untouched.
    """

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def create_note(self, create_dto: NoteCreate, user_id: str) -> Note:
        note = await self._run(self._repo.create, user_id, create_dto)
        logger.info("Note created", extra={"note_id": note.id, "user_id": user_id})
        return note

    async def get_note(self, note_id: str, user_id: str) -> Note:
        return await self._run(self._repo.get, user_id, note_id)

    async def list_notes(self, user_id: str) -> Sequence[Note]:
        """List the user's notes in creation order."""
        return await self._run(self._repo.list, user_id)

    async def update_note(self, note_id: str, update_dto: NoteUpdate, user_id: str) -> Note:
        """Apply a partial update; fields the caller omitted stay as they are."""
        note = await self._run(self._repo.update, user_id, note_id, update_dto)
        logger.info(
            "Note updated",
            extra={"note_id": note_id, "user_id": user_id, "fields": sorted(update_dto.changes())},
        )
        return note

    async def delete_note(self, note_id: str, user_id: str) -> None:
        await self._run(self._repo.delete, user_id, note_id)
        logger.info("Note deleted", extra={"note_id": note_id, "user_id": user_id})

    @staticmethod
    async def _run(func: Callable, *args):
        """Run a store call in a worker thread; the stores lock with threads."""
        return await asyncio.to_thread(func, *args)
