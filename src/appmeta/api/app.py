"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from appmeta import __version__
from appmeta.api.deps import set_store
from appmeta.api.v1.router import router as v1_router
from appmeta.config.settings import Settings
from appmeta.core.store import MetadataStore

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # Auto-detect appmeta-config.yaml if present
        yaml_path = Path("appmeta-config.yaml")
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting AppMeta v%s", __version__)

        # The index lives exactly as long as the application
        store = MetadataStore.from_settings(settings.index)
        set_store(store)

        app.state.settings = settings
        app.state.store = store

        logger.info("AppMeta is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down AppMeta...")
        store.clear()
        set_store(None)
        logger.info("AppMeta shutdown complete")

    app = FastAPI(
        title="AppMeta",
        description="In-memory keyword search over YAML application metadata documents.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")

    return app
