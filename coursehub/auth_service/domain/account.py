from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Account:
    """Registered user; ``password_hash`` is a bcrypt digest, never plaintext."""

    account_id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime
