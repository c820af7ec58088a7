from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notevault.core.models.identity import Identity


class CredentialRepository(ABC):
    """Abstract repository interface for registered identities."""

    @abstractmethod
    def register(self, username: str, password: str) -> Identity:  # pragma: no cover - interface only
        """Create an identity, raising ``AlreadyExistsError`` if the username is taken.

        The existence check and the insert must be atomic with respect to
        other registrations.
        """

    @abstractmethod
    def login(self, username: str, password: str) -> Identity:  # pragma: no cover
        """Return the identity for matching credentials.

        Raises ``NotFoundError`` for an unknown username and
        ``WrongCredentialError`` for a password that does not match.
        """

    @abstractmethod
    def count(self) -> int:  # pragma: no cover
        """Number of registered identities."""
