"""Domain-level request and result contracts shared by multiple layers."""

from __future__ import annotations

from dataclasses import dataclass

from .account import Account


@dataclass(slots=True)
class RegisterInput:
    """Validated inputs required to register an account."""

    name: str
    email: str
    password: str


@dataclass(slots=True)
class NewAccount:
    """Account data ready for persistence, with the password already hashed."""

    name: str
    email: str
    password_hash: str


@dataclass(slots=True)
class AuthResult:
    """Token and account returned after a successful register or login."""

    token: str
    account: Account


DEMO_ACCOUNTS: tuple[RegisterInput, ...] = (
    RegisterInput(name="Demo Admin", email="admin@coursehub.dev", password="admin-password"),
    RegisterInput(name="Demo Student", email="student@coursehub.dev", password="password123"),
)
