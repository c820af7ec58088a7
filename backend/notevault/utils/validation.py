from __future__ import annotations

WEAK_PASSWORDS = frozenset({"password", "12345678", "qwertyui", "password1", "password123"})


def validate_password_strength(password: str, min_length: int = 8) -> tuple[bool, str | None]:
    """Validate password strength."""
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters long"

    if password.lower() in WEAK_PASSWORDS:
        return False, "Password is too weak. Please choose a stronger password."
    return True, None


def validate_username(username: str) -> tuple[bool, str | None]:
    """Usernames are matched exactly, so refuse ones that only differ by padding."""
    if not username or not username.strip():
        return False, "Username is required"
    if username != username.strip():
        return False, "Username must not start or end with whitespace"
    return True, None
