"""Password hashing and verification backed by bcrypt."""

from __future__ import annotations

import bcrypt

from ..errors import ValidationFailure

# bcrypt only reads the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted adaptive hashing with a configurable work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Return a bcrypt digest for ``password`` using a fresh salt."""
        raw = password.encode("utf-8")
        if len(raw) > MAX_PASSWORD_BYTES:
            raise ValidationFailure(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a stored digest.

        Returns ``False`` instead of raising for malformed hashes or input.
        """
        try:
            raw = password.encode("utf-8")
            if len(raw) > MAX_PASSWORD_BYTES:
                return False
            return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False
