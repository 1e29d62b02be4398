"""Credential hashing, identity tokens and request authentication."""

from .bearer import extract_bearer_token, require_identity
from .passwords import PasswordHasher
from .tokens import Identity, TokenCodec

__all__ = [
    "Identity",
    "PasswordHasher",
    "TokenCodec",
    "extract_bearer_token",
    "require_identity",
]
