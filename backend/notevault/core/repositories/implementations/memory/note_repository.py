from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from notevault.core.errors import ForbiddenError, NotFoundError, ValidationError
from notevault.core.models.base import utcnow
from notevault.core.models.note import Note, Priority
from notevault.core.repositories.note_repository import NoteRepository
from notevault.utils.locks import ReadWriteLock

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from notevault.core.schemas.note import NoteCreate, NoteUpdate


class InMemoryNoteRepository(NoteRepository):
    """Process-local note store guarded by a reader/writer lock.

    Stored ``Note`` objects are never mutated in place: an update builds a
    new validated note and swaps it in under the write lock, so readers see
    either the old or the new version. Callers always receive copies.
    """

    ID_PREFIX = "note_"

    def __init__(self, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._notes: dict[str, Note] = {}
        self._counter = 0
        self._lock = ReadWriteLock()
        self._clock = clock

    def create(self, user_id: str, data: NoteCreate) -> Note:
        title = _require_title(data.title)
        priority = _coerce_priority(data.priority)
        tags = list(data.tags or [])

        with self._lock.write_locked():
            now = self._clock()
            note = _build_note(
                id=self._next_id(),
                user_id=user_id,
                title=title,
                body=data.body or "",
                done=False,
                priority=priority,
                tags=tags,
                created_at=now,
                updated_at=now,
            )
            self._notes[note.id] = note
            return note.model_copy(deep=True)

    def get(self, user_id: str, note_id: str) -> Note:
        with self._lock.read_locked():
            return self._owned(user_id, note_id).model_copy(deep=True)

    def list(self, user_id: str) -> Sequence[Note]:
        with self._lock.read_locked():
            return [n.model_copy(deep=True) for n in self._notes.values() if n.user_id == user_id]

    def update(self, user_id: str, note_id: str, data: NoteUpdate) -> Note:
        changes = data.changes()
        if "title" in changes:
            changes["title"] = _require_title(changes["title"])
        if "priority" in changes:
            changes["priority"] = _coerce_priority(changes["priority"])
        if "tags" in changes:
            changes["tags"] = list(changes["tags"])

        with self._lock.write_locked():
            current = self._owned(user_id, note_id)
            updated = _build_note(**{**current.model_dump(), **changes, "updated_at": self._clock()})
            self._notes[note_id] = updated
            return updated.model_copy(deep=True)

    def delete(self, user_id: str, note_id: str) -> None:
        with self._lock.write_locked():
            self._owned(user_id, note_id)
            del self._notes[note_id]

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._notes)

    def _next_id(self) -> str:
        # Caller holds the write lock. The counter never goes back, so ids
        # of deleted notes are not reissued.
        self._counter += 1
        return f"{self.ID_PREFIX}{self._counter}"

    def _owned(self, user_id: str, note_id: str) -> Note:
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        if note.user_id != user_id:
            raise ForbiddenError()
        return note


def _require_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise ValidationError("Title is required")
    return title


def _coerce_priority(value) -> Priority:
    if value is None:
        return Priority.MEDIUM
    try:
        return Priority(value)
    except ValueError as err:
        raise ValidationError(f"Invalid priority {value!r}; expected low, medium or high") from err


def _build_note(**fields) -> Note:
    try:
        return Note.model_validate(fields)
    except PydanticValidationError as err:
        raise ValidationError(str(err)) from err
