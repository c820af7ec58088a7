"""Stateless signed bearer tokens.

Wire format: ``<payload>.<signature>`` where ``payload`` is the unpadded
base64url encoding of the JSON claims and ``signature`` is the unpadded
base64url HMAC-SHA256 of the payload segment's encoded bytes. Claims are
readable by anyone holding the token; only their integrity is protected.

No state is kept besides the secret, so a single ``TokenService`` can be
shared by every request handler without locking.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from notevault.core.errors import (
    ExpiredTokenError,
    ForgedTokenError,
    InternalError,
    MalformedTokenError,
)
from notevault.core.models.base import utcnow
from notevault.core.schemas.auth import TokenClaims

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime, timedelta

    from notevault.core.models.identity import Identity

SEPARATOR = "."


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


class TokenService:
    """Issues and validates HMAC-signed tokens for registered identities."""

    def __init__(self, secret: str | bytes, *, clock: Callable[[], datetime] = utcnow) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)
        self._clock = clock

    def issue(self, identity: Identity, ttl: timedelta) -> str:
        """Mint a token for ``identity`` that expires ``ttl`` from now."""
        try:
            claims = TokenClaims(
                uid=identity.id,
                usr=identity.username,
                exp=self._clock() + ttl,
            )
            payload = claims.model_dump_json(by_alias=True).encode("utf-8")
        except (OverflowError, PydanticValidationError) as err:
            raise InternalError("Could not encode token claims") from err

        encoded = _b64encode(payload)
        return f"{encoded}{SEPARATOR}{self._sign(encoded)}"

    def validate(self, token: str) -> TokenClaims:
        """Return the claims of ``token`` or raise a ``TokenError`` subclass.

        The signature is always recomputed from the payload segment; the
        claims are only decoded once it matches.
        """
        segment, sep, signature = token.partition(SEPARATOR)
        if not sep or not segment or not signature:
            raise MalformedTokenError()

        try:
            expected = self._sign(segment)
            presented = signature.encode("utf-8")
        except UnicodeEncodeError as err:
            raise MalformedTokenError() from err
        if not hmac.compare_digest(expected.encode("ascii"), presented):
            raise ForgedTokenError()

        try:
            claims = TokenClaims.model_validate_json(_b64decode(segment))
        except (binascii.Error, UnicodeError, PydanticValidationError) as err:
            raise MalformedTokenError() from err

        if claims.expires_at <= self._clock():
            raise ExpiredTokenError()
        return claims

    def _sign(self, segment: str) -> str:
        mac = hmac.new(self._secret, segment.encode("utf-8"), hashlib.sha256)
        return _b64encode(mac.digest())
