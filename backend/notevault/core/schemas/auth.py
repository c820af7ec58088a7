from __future__ import annotations

import re

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from notevault.core.models.base import AppBaseModel

_SUBMICROSECOND = re.compile(r"(\.\d{6})\d+")


class AuthUser(AppBaseModel):
    """Authenticated user recovered from a validated bearer token."""

    id: str
    username: str


class AuthResult(AppBaseModel):
    """Outcome of a successful sign-up or sign-in."""

    token: str
    token_type: str = "bearer"
    expires_in: int
    user: AuthUser


class TokenClaims(BaseModel):
    """Decoded token payload.

    Read and written only under the short wire keys ``uid``/``usr``/``exp``
    so tokens stay compatible with ones minted by earlier deployments. Field
    names are not accepted as input.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=False)

    user_id: str = Field(..., alias="uid")
    username: str = Field(..., alias="usr")
    expires_at: AwareDatetime = Field(..., alias="exp")

    @field_validator("expires_at", mode="before")
    @classmethod
    def truncate_nanoseconds(cls, v):
        # RFC 3339 allows nanosecond stamps; datetime stops at microseconds.
        if isinstance(v, str):
            return _SUBMICROSECOND.sub(r"\1", v)
        return v

    def to_user(self) -> AuthUser:
        return AuthUser(id=self.user_id, username=self.username)
