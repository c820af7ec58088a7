from __future__ import annotations

from enum import Enum

from pydantic import Field

from .base import TimestampedModel


class Priority(str, Enum):
    """Closed set of note priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Note(TimestampedModel):
    """Note domain model.

    ``user_id`` is fixed when the note is created and never changes.
    """

    id: str = Field(..., description="Store-assigned note identifier")
    user_id: str = Field(..., description="Owner of the note")

    title: str = Field(..., min_length=1, description="Note title")
    body: str = Field(default="", description="Free-text body")
    done: bool = Field(default=False, description="Completion flag")
    priority: Priority = Field(default=Priority.MEDIUM, description="Note priority")
    tags: list[str] = Field(default_factory=list, description="Tags in the order supplied")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "note_1",
                    "user_id": "9f2c41d07a5be863",
                    "title": "Buy milk",
                    "body": "Two litres, semi-skimmed.",
                    "done": False,
                    "priority": "high",
                    "tags": ["errands", "home"],
                }
            ]
        }
    }
