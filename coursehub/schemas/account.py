"""Account-related DTOs shared across services."""

from __future__ import annotations

from pydantic import BaseModel


class UserSummary(BaseModel):
    """Public projection of an account; never carries the password hash."""

    id: str
    name: str
    email: str


class AuthPayload(BaseModel):
    token: str
    user: UserSummary
