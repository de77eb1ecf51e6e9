"""
app.py — FastAPI application factory and startup lifecycle.

Exposes the demo reset over HTTP so a scheduler or an operator can trigger
it against the hosted demo environment.

Usage (via launcher):
    python main.py --serve

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from demo_reset.controllers.reset_controller import router as reset_router
from demo_reset.repository.data_repository import DataRepository
from demo_reset.services.auth_service import AuthService
from demo_reset.services.reset_service import DemoResetService
from demo_reset.utils.config import Settings, get_settings
from demo_reset.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Services live on app.state so the dependency providers can resolve them.
    """
    settings = settings or get_settings()

    repository = DataRepository(settings)
    reset_service = DemoResetService(repository=repository, settings=settings)
    auth_service = AuthService(settings=settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the schema before accepting requests."""
        logger.info("Startup: initializing database schema")
        app.state.repository.initialize_database()
        logger.info("Startup complete — ready to reset demo data")
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.include_router(reset_router)

    app.state.repository = repository
    app.state.reset_service = reset_service
    app.state.auth_service = auth_service

    return app


# Module-level app object for uvicorn
app = create_app()
