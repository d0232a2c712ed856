"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sportevents import __version__
from sportevents.api.routes import events
from sportevents.api.routes.events import DEFAULT_HEARTBEAT_INTERVAL
from sportevents.db import DEFAULT_DB_PATH, Database
from sportevents.events import NotificationHub
from sportevents.events.bus import DEFAULT_MAX_BUFFER

logger = logging.getLogger(__name__)


def create_app(
    db_path: str | Path | None = None,
    max_buffer: int = DEFAULT_MAX_BUFFER,
    heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting sport events API...")
        db = Database(db_path or DEFAULT_DB_PATH)
        await db.connect()
        app.state.db = db
        logger.info("Database connected")

        yield

        logger.info("Shutting down sport events API...")
        await app.state.hub.close()
        await db.disconnect()
        logger.info("Database disconnected")

    app = FastAPI(
        title="Sport Events",
        description="Sport event lifecycle tracking with live status updates",
        version=__version__,
        lifespan=lifespan,
    )

    # One hub per application; routes reach it through app state
    app.state.hub = NotificationHub(max_buffer=max_buffer)
    app.state.heartbeat_interval = heartbeat_interval

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(events.router, prefix="/events", tags=["events"])

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


# Create the app instance
app = create_app()
