from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import AppBaseModel, utcnow


class Identity(AppBaseModel):
    """Registered user together with its password verification material.

    Only the salted hash is kept, never the password itself.
    """

    id: str = Field(..., description="Opaque identifier, stable for the identity's lifetime")
    username: str = Field(..., min_length=1, description="Unique, case-sensitive username")
    password_hash: str = Field(..., repr=False)
    salt: str = Field(..., repr=False)
    created_at: datetime = Field(default_factory=utcnow)
