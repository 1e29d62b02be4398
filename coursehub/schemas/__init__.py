"""Shared schema exports."""

from .account import AuthPayload, UserSummary
from .base import CamelModel
from .envelope import ApiResponse

__all__ = [
    "ApiResponse",
    "AuthPayload",
    "CamelModel",
    "UserSummary",
]
