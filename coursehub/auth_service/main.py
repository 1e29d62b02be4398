"""FastAPI application wiring for the auth service."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import get_settings
from ..db import close_pool, open_pool
from ..security.passwords import PasswordHasher
from ..security.rate_limiter import build_rate_limiter
from ..web import build_token_codec, configure_logging, create_service_app, serve
from .api.routes import router
from .domain.service import AccountService
from .repository import AccountRepository

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise shared resources (Postgres pool, codec, services) for the app lifecycle."""
    pool = open_pool(settings.database_url)
    repository = AccountRepository(pool)
    repository.ensure_schema()
    codec = build_token_codec(settings)
    app.state.pool = pool
    app.state.token_codec = codec
    app.state.rate_limiter = build_rate_limiter(settings)
    service = AccountService(
        repository,
        PasswordHasher(rounds=settings.bcrypt_rounds),
        codec,
    )
    if settings.seed_demo_data:
        service.seed_demo_accounts()
    app.state.account_service = service
    try:
        yield
    finally:
        close_pool(pool)


app = create_service_app(title="auth-service", settings=settings, router=router, lifespan=lifespan)


def run() -> None:
    serve(app, settings)
