from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notevault.api.v1.schemas.auth import (
    AuthResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    UserRead,
)
from notevault.dependencies import (
    get_auth_service,
    get_current_user,
    rate_limit_by_ip,
)

if TYPE_CHECKING:
    from notevault.core.schemas.auth import AuthUser
    from notevault.core.services.auth_service import AuthService

# Configure router with authentication-specific settings
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        429: {"description": "Too many requests"}
    }
)


@router.post(
    "/register",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Username already taken"}},
    dependencies=[Depends(rate_limit_by_ip("register"))],
)
async def register(
    payload: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register with username and password and receive a bearer token."""
    result = await auth_service.sign_up(payload.username, payload.password)
    return SignUpResponse.from_result(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit_by_ip("login"))],
)
async def login(
    payload: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Sign in with username and password."""
    result = await auth_service.sign_in(payload.username, payload.password)
    return AuthResponse.from_result(result)


@router.get("/me", response_model=UserRead)
async def me(current_user: AuthUser = Depends(get_current_user)):
    """Validate the current user's token and return user info."""
    return UserRead(id=current_user.id, username=current_user.username)
