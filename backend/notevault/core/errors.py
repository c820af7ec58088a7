"""Error taxonomy shared by the stores, the token codec and the services.

Every expected failure is a ``NoteVaultError`` with a stable ``code``. The
core raises them and never logs or swallows them; translating them into
responses is the HTTP layer's job.

``InternalError`` signals a defect (an encoding or allocation failure that
should be impossible) and deliberately sits outside the ``NoteVaultError``
tree so it cannot be handled as an ordinary outcome.
"""

from __future__ import annotations


class NoteVaultError(Exception):
    """Base class for expected, caller-recoverable failures."""

    code = "error"
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyExistsError(NoteVaultError):
    code = "already_exists"
    default_message = "Username already taken"


class NotFoundError(NoteVaultError):
    code = "not_found"
    default_message = "Not found"


class WrongCredentialError(NoteVaultError):
    code = "wrong_credential"
    default_message = "Invalid credentials"


class ForbiddenError(NoteVaultError):
    code = "forbidden"
    default_message = "Access denied"


class ValidationError(NoteVaultError):
    code = "invalid_input"
    default_message = "Invalid input"


class TokenError(NoteVaultError):
    """Raised when a bearer token cannot be accepted."""

    code = "invalid_token"
    default_message = "Invalid token"


class MalformedTokenError(TokenError):
    code = "malformed_token"
    default_message = "Malformed token"


class ForgedTokenError(TokenError):
    code = "forged_token"
    default_message = "Invalid token signature"


class ExpiredTokenError(TokenError):
    code = "expired_token"
    default_message = "Token has expired"


class InternalError(Exception):
    """Unexpected failure inside the core; indicates a bug, not bad input."""
