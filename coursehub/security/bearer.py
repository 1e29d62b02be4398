"""FastAPI dependency resolving the caller identity from a bearer token."""

from __future__ import annotations

from fastapi import Request

from ..errors import TokenError, TokenRejected
from .tokens import Identity, TokenCodec

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: str | None) -> str:
    """Strip the ``Bearer `` prefix from an ``Authorization`` header value.

    A missing header, another scheme or an empty token are all reported as
    ``TokenError.MISSING`` so callers can tell "no token" from "bad token".
    """
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        raise TokenRejected(TokenError.MISSING)
    token = header_value[len(BEARER_PREFIX):].strip()
    if not token:
        raise TokenRejected(TokenError.MISSING)
    return token


def get_token_codec(request: Request) -> TokenCodec:
    """Resolve the `TokenCodec` stored on the FastAPI application state."""
    codec: TokenCodec = request.app.state.token_codec
    return codec


def require_identity(request: Request) -> Identity:
    """Authenticate the request and attach the identity to ``request.state``."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    identity = get_token_codec(request).authenticate(token)
    request.state.identity = identity
    return identity
