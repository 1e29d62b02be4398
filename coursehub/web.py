"""FastAPI application wiring shared by the service entrypoints."""

from __future__ import annotations

import logging
from typing import Any, Callable

import uvicorn
from fastapi import APIRouter, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .config import Settings
from .errors import install_error_handlers
from .security.tokens import TokenCodec

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def build_token_codec(settings: Settings) -> TokenCodec:
    """Construct the token codec from the shared secret configuration."""
    return TokenCodec(
        settings.jwt_secret,
        ttl_seconds=settings.jwt_ttl_seconds,
        issuer=settings.jwt_issuer,
    )


def create_service_app(
    *,
    title: str,
    settings: Settings,
    router: APIRouter,
    lifespan: Callable[[FastAPI], Any] | None = None,
) -> FastAPI:
    """Build a service application with CORS, error envelopes, health and metrics."""
    app = FastAPI(title=title, version=settings.version, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )
    install_error_handlers(app)

    @app.get("/healthz", tags=["health"])
    def healthz() -> dict[str, str]:
        """Return a minimal readiness indicator used by orchestration systems."""
        return {"status": "ok"}

    @app.get("/metrics", tags=["health"])
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(router)
    return app


def serve(app: FastAPI, settings: Settings) -> None:
    """Run ``app`` under uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_level=settings.log_level.lower())
