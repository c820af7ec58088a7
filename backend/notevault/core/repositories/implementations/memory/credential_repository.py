from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from notevault.core.errors import AlreadyExistsError, NotFoundError, WrongCredentialError
from notevault.core.models.base import utcnow
from notevault.core.models.identity import Identity
from notevault.core.repositories.credential_repository import CredentialRepository
from notevault.core.security.passwords import generate_salt, hash_password, verify_password
from notevault.utils.locks import ReadWriteLock

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime


class InMemoryCredentialRepository(CredentialRepository):
    """Process-local identity store keyed by exact username."""

    ID_BYTES = 8

    def __init__(self, *, clock: Callable[[], datetime] = utcnow) -> None:
        self._identities: dict[str, Identity] = {}
        self._ids: set[str] = set()
        self._lock = ReadWriteLock()
        self._clock = clock

    def register(self, username: str, password: str) -> Identity:
        with self._lock.write_locked():
            if username in self._identities:
                raise AlreadyExistsError(f"Username {username!r} is already taken")

            salt = generate_salt()
            identity = Identity(
                id=self._new_id(),
                username=username,
                password_hash=hash_password(password, salt),
                salt=salt,
                created_at=self._clock(),
            )
            self._identities[username] = identity
            self._ids.add(identity.id)
            return identity.model_copy()

    def login(self, username: str, password: str) -> Identity:
        with self._lock.read_locked():
            identity = self._identities.get(username)
        # Identities are never replaced once stored, so verifying outside
        # the lock is safe.
        if identity is None:
            raise NotFoundError("User not found")
        if not verify_password(password, identity.salt, identity.password_hash):
            raise WrongCredentialError()
        return identity.model_copy()

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._identities)

    def _new_id(self) -> str:
        while True:
            candidate = secrets.token_hex(self.ID_BYTES)
            if candidate not in self._ids:
                return candidate
