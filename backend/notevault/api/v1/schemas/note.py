from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from notevault.core.models.base import AppBaseModel
from notevault.core.models.note import Priority  # noqa: TCH001


class NoteRead(AppBaseModel):
    id: str
    user_id: str
    title: str
    body: str
    done: bool
    priority: Priority
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class NoteListResponse(AppBaseModel):
    notes: list[NoteRead]
    count: int


class MessageResponse(AppBaseModel):
    message: str
