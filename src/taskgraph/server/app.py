"""FastAPI application for the Taskgraph server."""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, Response

from taskgraph.errors import (
    NotFoundError,
    TaskgraphError,
    UnsupportedFormatError,
    ValidationError,
)
from taskgraph.server.routes import entities, health, relations
from taskgraph.store import TaskStore, create_task_store
from taskgraph.views import Format, negotiate, render_errors

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from taskgraph.config import TaskgraphConfig

logger = logging.getLogger(__name__)


def error_status(exc: TaskgraphError) -> int:
    """Map an error to its HTTP status code."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, UnsupportedFormatError):
        return 415 if exc.request_body else 406
    return 400


class TaskgraphServer:
    """Main server application.

    Owns the FastAPI app and the store it serves. The store is created
    explicitly (or passed in) and lives exactly as long as this object.
    """

    def __init__(
        self,
        store: TaskStore | None = None,
        config: "TaskgraphConfig | None" = None,
    ):
        if config is None:
            from taskgraph.config import get_default_config

            config = get_default_config()
        self._config = config
        self._store = store or create_task_store(
            seed_demo_data=config.store.seed_demo_data
        )
        self._shutdown_callbacks: list[Callable[[], None]] = []

        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application."""
        return self._app

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def allow_shutdown(self) -> bool:
        return self._config.server.allow_shutdown

    def on_shutdown_request(self, callback: Callable[[], None]) -> None:
        """Register a callback run when GET /shutdown is called."""
        self._shutdown_callbacks.append(callback)

    def request_shutdown(self) -> None:
        logger.info("shutdown_requested")
        for callback in self._shutdown_callbacks:
            callback()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI app."""

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
            logger.info("Starting Taskgraph server")
            yield
            logger.info("Shutting down Taskgraph server")

        app = FastAPI(
            title="Taskgraph",
            description="Todo manager API for projects, todos and categories",
            version="0.1.0",
            lifespan=lifespan,
        )

        # Store references in app state
        app.state.server = self
        app.state.store = self._store
        app.state.default_format = (
            Format.XML if self._config.default_format == "xml" else Format.JSON
        )

        app.add_exception_handler(TaskgraphError, _handle_taskgraph_error)
        app.add_exception_handler(Exception, _handle_unexpected_error)

        # Fixed paths first so /{collection} does not shadow them
        app.include_router(health.router, tags=["health"])
        app.include_router(relations.router, tags=["relationships"])
        app.include_router(entities.router, tags=["entities"])

        return app


def _error_format(request: Request) -> Format:
    try:
        return negotiate(request.headers.get("accept"))
    except UnsupportedFormatError:
        return Format.JSON


async def _handle_taskgraph_error(request: Request, exc: Exception) -> Response:
    assert isinstance(exc, TaskgraphError)
    status_code = error_status(exc)
    logger.info(
        "request_rejected",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status": status_code,
            "error": exc.message,
        },
    )
    fmt = _error_format(request)
    if request.method == "HEAD":
        return Response(status_code=status_code, media_type=fmt.value)
    return Response(
        content=render_errors([exc.message], fmt),
        status_code=status_code,
        media_type=fmt.value,
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> Response:
    logger.exception(
        "request_failed",
        extra={"method": request.method, "path": request.url.path},
    )
    fmt = _error_format(request)
    return Response(
        content=render_errors([f"Internal error: {type(exc).__name__}"], fmt),
        status_code=500,
        media_type=fmt.value,
    )


def create_app(
    store: TaskStore | None = None,
    config: "TaskgraphConfig | None" = None,
) -> FastAPI:
    """Create the FastAPI application."""
    server = TaskgraphServer(store=store, config=config)
    return server.app
