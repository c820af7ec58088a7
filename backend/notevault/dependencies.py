from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import TYPE_CHECKING

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notevault.core.errors import MalformedTokenError, TokenError
from notevault.core.schemas.auth import AuthUser
from notevault.core.services.auth_service import AuthService
from notevault.core.services.note_service import NoteService
from notevault.utils.logging import get_logger

if TYPE_CHECKING:
    from notevault.config import Settings
    from notevault.core.repositories.credential_repository import CredentialRepository
    from notevault.core.repositories.note_repository import NoteRepository
    from notevault.core.security.tokens import TokenService

logger = get_logger(__name__)

# Use auto_error=False to handle missing tokens gracefully
http_bearer = HTTPBearer(auto_error=False)


class LoginRateLimiter:
    """Sliding-window attempt counter keyed by operation and client IP."""

    def __init__(self, max_attempts: int, window_seconds: int, enabled: bool = True) -> None:
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.enabled = enabled
        self._attempts: dict[str, list[float]] = {}
        self._last_sweep = 0.0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._attempts)

    def hit(self, identifier: str, now: float | None = None) -> int | None:
        """Record an attempt; return seconds until reset when over the limit."""
        if not self.enabled:
            return None
        now = time.time() if now is None else now
        window_start = now - self.window_seconds
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(window_start)
                self._last_sweep = now
            attempts = [ts for ts in self._attempts.get(identifier, []) if ts > window_start]
            if len(attempts) >= self.max_attempts:
                self._attempts[identifier] = attempts
                earliest_attempt = min(attempts)
                return max(1, math.ceil(self.window_seconds - (now - earliest_attempt)))
            attempts.append(now)
            self._attempts[identifier] = attempts
            return None

    def _sweep(self, window_start: float) -> None:
        # Caller holds the lock. Drop keys with no attempts left in the window.
        stale = [
            key for key, stamps in self._attempts.items()
            if not stamps or stamps[-1] <= window_start
        ]
        for key in stale:
            del self._attempts[key]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_repository(request: Request) -> CredentialRepository:
    return request.app.state.credentials


def get_note_repository(request: Request) -> NoteRepository:
    return request.app.state.notes


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_rate_limiter(request: Request) -> LoginRateLimiter:
    return request.app.state.rate_limiter


def get_note_service(repo: NoteRepository = Depends(get_note_repository)) -> NoteService:
    """Get a request-scoped note service over the shared store."""
    return NoteService(repo)


def get_auth_service(
    credentials: CredentialRepository = Depends(get_credential_repository),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """Get a request-scoped auth service over the shared stores."""
    return AuthService(
        credentials,
        tokens,
        token_ttl=timedelta(seconds=settings.token_ttl_seconds),
        min_password_length=settings.min_password_length,
    )


def rate_limit_by_ip(operation: str) -> Callable[[Request, LoginRateLimiter], None]:
    """Build a dependency that rate limits ``operation`` per client IP.

    Raises:
        HTTPException: 429 with Retry-After headers once the limit is exceeded
    """

    def dependency(
        request: Request,
        limiter: LoginRateLimiter = Depends(get_rate_limiter),
    ) -> None:
        client_ip = request.client.host if request.client else "unknown"
        retry_after = limiter.hit(f"{operation}:{client_ip}")
        if retry_after is None:
            return

        logger.warning(f"Rate limited {operation} attempt", extra={"ip": client_ip})
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many {operation} attempts. Please try again later.",
            headers={
                "Retry-After": str(retry_after),
                "RateLimit-Limit": str(limiter.max_attempts),
                "RateLimit-Remaining": "0",
                "RateLimit-Reset": str(retry_after),
            },
        )

    return dependency


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(http_bearer),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthUser:
    """Validate the bearer token and return the authenticated user.

    Token failures propagate as ``TokenError`` and are rendered as 401 with
    ``WWW-Authenticate: Bearer`` by the registered exception handler.
    """
    if not credentials or not credentials.credentials:
        raise MalformedTokenError("Authentication required")
    try:
        return auth_service.authenticate(credentials.credentials)
    except TokenError as err:
        logger.warning(
            "Token validation failed",
            extra={"error_type": type(err).__name__, "token_length": len(credentials.credentials)},
        )
        raise
