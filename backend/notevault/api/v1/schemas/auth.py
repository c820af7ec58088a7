from __future__ import annotations

from pydantic import BaseModel, Field

from notevault.core.schemas.auth import AuthResult


class SignUpRequest(BaseModel):
    """Request to register with username and password."""

    username: str = Field(..., min_length=1, max_length=64, description="Unique, case-sensitive username")
    password: str = Field(..., min_length=1, description="User's password")


class SignInRequest(BaseModel):
    """Request to sign in with username and password."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="User's password")


class UserRead(BaseModel):
    id: str = Field(..., description="Opaque user identifier")
    username: str


class AuthResponse(BaseModel):
    """Response containing the bearer token and the user it belongs to."""

    token: str = Field(..., description="Bearer token for API calls")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    user: UserRead = Field(..., description="User information (id, username)")

    @classmethod
    def from_result(cls, result: AuthResult) -> AuthResponse:
        return cls(
            token=result.token,
            token_type=result.token_type,
            expires_in=result.expires_in,
            user=UserRead(id=result.user.id, username=result.user.username),
        )


class SignUpResponse(AuthResponse):
    message: str = "registered successfully"
