"""SHA-1 digest splitting for k-anonymity range queries.

Only the 5-character prefix ever leaves the process; the 35-character
suffix is compared locally.
"""

from __future__ import annotations

import hashlib

from app.exceptions import ValidationError

PREFIX_LENGTH = 5
DIGEST_LENGTH = 40


def validate_password(password: str) -> None:
    """Raise ValidationError if the password is empty or only whitespace."""
    if not password or not password.strip():
        raise ValidationError("password required")


def password_digest(password: str) -> str:
    """Return the upper-case SHA-1 hex digest of the UTF-8 encoded password."""
    validate_password(password)
    return hashlib.sha1(password.encode("utf-8")).hexdigest().upper()  # nosec B324


def split_digest(password: str) -> tuple[str, str]:
    """Return ``(prefix, suffix)`` of the password digest."""
    digest = password_digest(password)
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]
