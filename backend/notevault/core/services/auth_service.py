from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import TYPE_CHECKING

from notevault.core.errors import (
    AlreadyExistsError,
    NotFoundError,
    ValidationError,
    WrongCredentialError,
)
from notevault.core.schemas.auth import AuthResult, AuthUser
from notevault.utils.logging import get_logger
from notevault.utils.validation import validate_password_strength, validate_username

if TYPE_CHECKING:
    from notevault.core.models.identity import Identity
    from notevault.core.repositories.credential_repository import CredentialRepository
    from notevault.core.security.tokens import TokenService


logger = get_logger(__name__)


class AuthService:
    """Authentication service handling business logic for auth operations."""

    def __init__(
        self,
        credentials: CredentialRepository,
        tokens: TokenService,
        *,
        token_ttl: timedelta = timedelta(hours=24),
        min_password_length: int = 8,
    ) -> None:
        self._credentials = credentials
        self._tokens = tokens
        self._token_ttl = token_ttl
        self._min_password_length = min_password_length

    async def sign_up(self, username: str, password: str) -> AuthResult:
        """Register a new identity and hand back a token for it."""
        is_valid_username, username_error = validate_username(username)
        if not is_valid_username:
            raise ValidationError(username_error)

        is_valid_password, password_error = validate_password_strength(
            password, self._min_password_length
        )
        if not is_valid_password:
            raise ValidationError(password_error)

        try:
            identity = await asyncio.to_thread(self._credentials.register, username, password)
        except AlreadyExistsError:
            logger.info("Sign up rejected, username taken", extra={"username": username})
            raise

        logger.info("User signed up successfully", extra={"username": username, "user_id": identity.id})
        return self._issue(identity)

    async def sign_in(self, username: str, password: str) -> AuthResult:
        """Verify credentials and hand back a fresh token.

        Unknown usernames are reported exactly like wrong passwords so
        callers cannot probe which usernames exist.
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        try:
            identity = await asyncio.to_thread(self._credentials.login, username, password)
        except (NotFoundError, WrongCredentialError) as err:
            logger.warning(
                "Sign in failed",
                extra={"username": username, "error_type": type(err).__name__},
            )
            raise WrongCredentialError("Invalid username or password") from err

        logger.info("User signed in successfully", extra={"username": username, "user_id": identity.id})
        return self._issue(identity)

    def authenticate(self, token: str) -> AuthUser:
        """Validate a bearer token and return the user it was issued to."""
        return self._tokens.validate(token).to_user()

    def _issue(self, identity: Identity) -> AuthResult:
        token = self._tokens.issue(identity, self._token_ttl)
        return AuthResult(
            token=token,
            token_type="bearer",
            expires_in=int(self._token_ttl.total_seconds()),
            user=AuthUser(id=identity.id, username=identity.username),
        )
