"""Salted password hashing.

Hashes are base64(SHA-256(salt + password)) with a 16-byte random salt per
identity. This is a fast hash: it defeats rainbow tables but not a
determined offline brute force, so a leaked identity table should be
treated as leaked passwords. Swapping in a memory-hard KDF only needs
changes here.
"""

from __future__ import annotations

import base64
import hashlib
import secrets

SALT_BYTES = 16


def generate_salt() -> str:
    """Return a fresh random salt, base64 encoded."""
    return base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode("ascii")


def hash_password(password: str, salt: str) -> str:
    """Hash a password with the given salt."""
    digest = hashlib.sha256(f"{salt}{password}".encode()).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_password(password: str, salt: str, password_hash: str) -> bool:
    """Check a password against its stored salted hash in constant time."""
    expected = hash_password(password, salt)
    return secrets.compare_digest(expected.encode("ascii"), password_hash.encode("utf-8"))
