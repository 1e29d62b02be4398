"""FastAPI application wiring for the course service."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import get_settings
from ..db import close_pool, open_pool
from ..web import configure_logging, create_service_app, serve
from .api.routes import router
from .domain.service import CourseService
from .repository import CourseRepository

settings = get_settings()
configure_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Postgres pool, ensure the schema and optionally seed the demo catalog."""
    pool = open_pool(settings.database_url)
    repository = CourseRepository(pool)
    repository.ensure_schema()
    service = CourseService(repository)
    if settings.seed_demo_data:
        service.seed_demo_courses()
    app.state.pool = pool
    app.state.course_service = service
    try:
        yield
    finally:
        close_pool(pool)


app = create_service_app(title="course-service", settings=settings, router=router, lifespan=lifespan)


def run() -> None:
    serve(app, settings)
