"""FastAPI application wiring for the enrollment service."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import get_settings
from ..db import close_pool, open_pool
from ..web import build_token_codec, configure_logging, create_service_app, serve
from .api.routes import router
from .domain.service import EnrollmentService
from .repository import EnrollmentRepository

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Postgres pool and wire the token codec shared with the auth service."""
    pool = open_pool(settings.database_url)
    repository = EnrollmentRepository(pool)
    repository.ensure_schema()
    app.state.pool = pool
    app.state.token_codec = build_token_codec(settings)
    app.state.enrollment_service = EnrollmentService(repository)
    try:
        yield
    finally:
        close_pool(pool)


app = create_service_app(title="enrollment-service", settings=settings, router=router, lifespan=lifespan)


def run() -> None:
    serve(app, settings)
