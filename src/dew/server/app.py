"""FastAPI application for the Dew server."""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from dew.server.routes import health, todos

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from dew.config import DewConfig
    from dew.snapshot import SnapshotWriter
    from dew.todos import TodoService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class DewServer:
    """Main server application.

    Owns the FastAPI app and ties the snapshot writer to its lifespan.
    """

    def __init__(
        self,
        service: "TodoService",
        snapshot_writer: "SnapshotWriter | None" = None,
        config: "DewConfig | None" = None,
    ):
        self._service = service
        self._snapshot_writer = snapshot_writer
        self._config = config

        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI app."""

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
            # Startup
            logger.info("server_starting")
            if self._snapshot_writer:
                await self._snapshot_writer.start()

            yield

            # Shutdown: drain the last mutations to disk
            logger.info("server_shutting_down")
            if self._snapshot_writer:
                await self._snapshot_writer.stop()

        app = FastAPI(
            title="Dew",
            description="Shared todo list API",
            version="0.1.0",
            lifespan=lifespan,
        )

        # Store references in app state
        app.state.server = self
        app.state.todos = self._service
        app.state.snapshot_writer = self._snapshot_writer
        app.state.config = self._config

        # Include routes
        app.include_router(health.router, tags=["health"])
        app.include_router(todos.router, prefix=API_PREFIX, tags=["todos"])

        return app


def create_app(
    service: "TodoService",
    snapshot_writer: "SnapshotWriter | None" = None,
    config: "DewConfig | None" = None,
) -> FastAPI:
    """Create the FastAPI application."""
    server = DewServer(
        service=service,
        snapshot_writer=snapshot_writer,
        config=config,
    )
    return server.app
