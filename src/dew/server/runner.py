"""Runtime server orchestration helpers."""

from __future__ import annotations

import asyncio
import logging
import os
import signal as signal_module
from pathlib import Path
from typing import TYPE_CHECKING

import uvicorn

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = logging.getLogger(__name__)


class ServerRunner:
    """Owns uvicorn serving and shutdown signal handling."""

    def __init__(
        self,
        app: FastAPI,
        *,
        host: str,
        port: int,
        ssl_cert: Path | None = None,
        ssl_key: Path | None = None,
    ) -> None:
        self._app = app
        self._host = host
        self._port = port
        self._ssl_cert = ssl_cert
        self._ssl_key = ssl_key

    @property
    def tls_enabled(self) -> bool:
        return self._ssl_cert is not None and self._ssl_key is not None

    def _uvicorn_config(self) -> uvicorn.Config:
        kwargs = {}
        if self.tls_enabled:
            kwargs["ssl_certfile"] = str(self._ssl_cert)
            kwargs["ssl_keyfile"] = str(self._ssl_key)
        return uvicorn.Config(
            self._app,
            host=self._host,
            port=self._port,
            log_level="info",
            log_config=None,  # Use shared logging config, not uvicorn's
            **kwargs,
        )

    async def run(self) -> None:
        """Run uvicorn until a shutdown signal arrives.

        The first SIGINT/SIGTERM asks uvicorn to exit gracefully, which runs
        the app lifespan shutdown (final snapshot). A second one forces exit.
        """
        server = uvicorn.Server(self._uvicorn_config())

        loop = asyncio.get_running_loop()
        shutdown_count = 0

        def handle_signal() -> None:
            nonlocal shutdown_count
            shutdown_count += 1

            if shutdown_count == 1:
                logger.info("server_shutdown_requested")
                server.should_exit = True
            else:
                logger.warning("server_force_shutdown")
                os._exit(1)

        for sig in (signal_module.SIGTERM, signal_module.SIGINT):
            loop.add_signal_handler(sig, handle_signal)

        scheme = "https" if self.tls_enabled else "http"
        logger.info(
            "server_listening",
            extra={"server.url": f"{scheme}://{self._host}:{self._port}"},
        )
        await server.serve()
