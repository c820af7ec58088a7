from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notevault.core.models.note import Note
    from notevault.core.schemas.note import NoteCreate, NoteUpdate


class NoteRepository(ABC):
    """Abstract repository interface for owner-scoped notes.

    Every operation takes the caller's identity as ``user_id`` and enforces
    ownership itself: a note belonging to someone else raises
    ``ForbiddenError`` and an unknown id raises ``NotFoundError``.
    Implementations must keep each mutation atomic.
    """

    @abstractmethod
    def create(self, user_id: str, data: NoteCreate) -> Note:  # pragma: no cover - interface only
        """Store a new note owned by ``user_id`` and return it."""

    @abstractmethod
    def get(self, user_id: str, note_id: str) -> Note:  # pragma: no cover
        """Return the caller's note."""

    @abstractmethod
    def list(self, user_id: str) -> Sequence[Note]:  # pragma: no cover
        """Return all and only the caller's notes, oldest first."""

    @abstractmethod
    def update(self, user_id: str, note_id: str, data: NoteUpdate) -> Note:  # pragma: no cover
        """Apply the supplied fields of ``data`` and return the updated note."""

    @abstractmethod
    def delete(self, user_id: str, note_id: str) -> None:  # pragma: no cover
        """Remove the caller's note; its id is never handed out again."""

    @abstractmethod
    def count(self) -> int:  # pragma: no cover
        """Total number of notes across all owners."""
