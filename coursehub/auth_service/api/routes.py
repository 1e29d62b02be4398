"""HTTP route definitions for the auth service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, field_validator, validate_email

from ...errors import RateLimited
from ...schemas import ApiResponse, AuthPayload, UserSummary
from ...security.bearer import require_identity
from ...security.rate_limiter import RateLimiter
from ...security.tokens import Identity
from ..domain.account import Account
from ..domain.contracts import AuthResult, RegisterInput
from ..domain.service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    """Payload accepted when registering an account."""

    name: str = Field(..., min_length=2, max_length=50)
    email: str
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        # Stored exactly as submitted; login compares verbatim.
        validate_email(value)
        return value


class LoginRequest(BaseModel):
    """Credentials presented at login; shape checks stay minimal so every
    mismatch surfaces as the same invalid-credentials error."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


def get_service(request: Request) -> AccountService:
    """Resolve the `AccountService` stored on the FastAPI application state."""
    service: AccountService = request.app.state.account_service
    return service


def get_rate_limiter(request: Request) -> RateLimiter:
    limiter: RateLimiter = request.app.state.rate_limiter
    return limiter


def _summary(account: Account) -> UserSummary:
    return UserSummary(id=account.account_id, name=account.name, email=account.email)


def _payload(result: AuthResult) -> AuthPayload:
    return AuthPayload(token=result.token, user=_summary(result.account))


@router.post("/register", response_model=ApiResponse[AuthPayload])
def register(
    request: Request,
    payload: RegisterRequest,
    service: AccountService = Depends(get_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ApiResponse[AuthPayload]:
    """Register an account and return a freshly issued token."""
    client = request.client.host if request.client else "unknown"
    if not limiter.allow(f"register:{client}"):
        raise RateLimited()
    result = service.register(
        RegisterInput(name=payload.name, email=payload.email, password=payload.password)
    )
    return ApiResponse.ok(_payload(result))


@router.post("/login", response_model=ApiResponse[AuthPayload])
def login(
    payload: LoginRequest,
    service: AccountService = Depends(get_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> ApiResponse[AuthPayload]:
    """Exchange email and password for a token."""
    if not limiter.allow(f"login:{payload.email}"):
        logger.warning("login rate limited")
        raise RateLimited()
    return ApiResponse.ok(_payload(service.login(payload.email, payload.password)))


@router.get("/me", response_model=ApiResponse[UserSummary])
def me(
    identity: Identity = Depends(require_identity),
    service: AccountService = Depends(get_service),
) -> ApiResponse[UserSummary]:
    """Return the account behind the bearer token."""
    return ApiResponse.ok(_summary(service.current_user(identity)))


@router.get("/health", response_model=ApiResponse[str])
def health() -> ApiResponse[str]:
    return ApiResponse.ok("Auth service is healthy")
