from __future__ import annotations

from pydantic import Field, field_validator

from notevault.core.models.base import AppBaseModel
from notevault.core.models.note import Priority


def _check_title(value: str) -> str:
    if not value.strip():
        raise ValueError("title must not be empty")
    return value


class NoteCreate(AppBaseModel):
    """Input for creating a note. Only ``title`` is required."""

    title: str = Field(..., description="Note title")
    body: str = Field(default="", description="Free-text body")
    priority: Priority = Field(default=Priority.MEDIUM, description="low, medium or high")
    tags: list[str] = Field(default_factory=list, description="Tags, order preserved")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _check_title(v)


class NoteUpdate(AppBaseModel):
    """Partial update. Presence is tracked per field.

    An omitted field keeps its stored value and a supplied field replaces it
    wholesale (``tags`` included). ``null`` is refused for every field so
    that "leave unchanged" and "clear" can never be confused: clear the body
    with ``""`` and the tags with ``[]``.
    """

    title: str | None = None
    body: str | None = None
    done: bool | None = None
    priority: Priority | None = None
    tags: list[str] | None = None

    @field_validator("title", "body", "done", "priority", "tags", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null; omit the field to leave it unchanged")
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return _check_title(v) if v is not None else v

    def changes(self) -> dict:
        """Return only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True)
