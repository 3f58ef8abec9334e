"""Runtime server orchestration helpers."""

from __future__ import annotations

import asyncio
import logging
import os
import signal as signal_module
from typing import TYPE_CHECKING

import uvicorn

if TYPE_CHECKING:
    from taskgraph.server.app import TaskgraphServer

logger = logging.getLogger(__name__)


class ServerRunner:
    """Owns uvicorn serving and shutdown coordination."""

    def __init__(
        self,
        server: TaskgraphServer,
        *,
        host: str,
        port: int,
    ) -> None:
        self._server = server
        self._host = host
        self._port = port
        self._uvicorn: uvicorn.Server | None = None
        self._shutdown_count = 0

        server.on_shutdown_request(self.request_shutdown)

    def request_shutdown(self) -> None:
        """Stop serving after in-flight requests complete."""
        if self._uvicorn is not None:
            self._uvicorn.should_exit = True

    def _handle_signal(self) -> None:
        self._shutdown_count += 1
        if self._shutdown_count == 1:
            # First signal: graceful shutdown
            logger.info("server_shutting_down")
            self.request_shutdown()
        else:
            # Second signal: force immediate exit
            logger.warning("server_force_shutdown")
            os._exit(1)

    async def run(self) -> None:
        """Run uvicorn until a signal or a shutdown request stops it."""
        uvicorn_config = uvicorn.Config(
            self._server.app,
            host=self._host,
            port=self._port,
            log_level="info",
            log_config=None,  # Use shared logging config, not uvicorn's
        )
        self._uvicorn = uvicorn.Server(uvicorn_config)

        loop = asyncio.get_running_loop()
        for sig in (signal_module.SIGTERM, signal_module.SIGINT):
            loop.add_signal_handler(sig, self._handle_signal)

        logger.info(
            "server_listening", extra={"host": self._host, "port": self._port}
        )
        await self._uvicorn.serve()
