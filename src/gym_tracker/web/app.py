"""FastAPI application for the gym-tracker JSON API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..db import (
    AttendanceRepository,
    StorageBackend,
    SupplementRepository,
    UserProfileRepository,
    create_backend,
)
from ..errors import StorageError
from ..services.stats import StatsService
from .routers import attendance, profile, stats, supplements, training_types

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Select the storage backend once and share it across requests."""
    backend: StorageBackend | None = app.state.backend
    if backend is None:
        backend = create_backend(app.state.settings)
        app.state.backend = backend

    app.state.attendance = AttendanceRepository(backend)
    app.state.supplements = SupplementRepository(backend)
    app.state.profiles = UserProfileRepository(backend)
    app.state.stats = StatsService(app.state.attendance, app.state.supplements)
    logger.info("API started on %s storage", backend.name)
    yield
    await backend.aclose()


def create_app(
    settings: Settings | None = None, backend: StorageBackend | None = None
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="gym-tracker",
        description="Gym attendance and supplement tracking",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.backend = backend

    app.include_router(attendance.router)
    app.include_router(training_types.router)
    app.include_router(supplements.router)
    app.include_router(stats.router)
    app.include_router(profile.router)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=502, content={"error": "storage_error", "message": str(exc)}
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400, content={"error": "bad_request", "message": str(exc)}
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.get("/backend")
    async def backend_info(request: Request):
        """Which storage backend this process selected."""
        store: StorageBackend = request.app.state.backend
        return {"backend": store.name, "localFallback": store.is_local_fallback()}

    return app
