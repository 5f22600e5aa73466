"""
vetcare_auth.api.app

FastAPI app factory for the VetCare auth layer.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from vetcare_auth import __version__
from vetcare_auth.api.errors import register_exception_handlers
from vetcare_auth.api.routers.health import router as health_router
from vetcare_auth.api.routers.identity import router as identity_router
from vetcare_auth.auth.service import FailOpenHook
from vetcare_auth.db.init_db import init_db
from vetcare_auth.db.session import create_engine, create_sessionmaker
from vetcare_auth.observability.logging import configure_logging, get_logger
from vetcare_auth.observability.middleware import RequestContextMiddleware
from vetcare_auth.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, fail_open_hook: FailOpenHook | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        if settings.uses_insecure_secret:
            log.warning("insecure_jwt_secret", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="VetCare Auth",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Optional-auth failures are always logged; this hook lets a deployment also count them.
    app.state.auth_fail_open_hook = fail_open_hook

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(identity_router)

    return app
