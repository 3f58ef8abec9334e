"""Health check and lifecycle routes."""

from fastapi import APIRouter, Request

from taskgraph.errors import NotFoundError

router = APIRouter()


@router.api_route("/", methods=["GET", "HEAD"])
async def liveness_check() -> dict[str, str]:
    """Liveness probe: answers as soon as the app can serve requests."""
    return {"status": "ok"}


@router.api_route("/health", methods=["GET", "HEAD"])
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy"}


@router.api_route("/ready", methods=["GET", "HEAD"])
async def readiness_check(request: Request) -> dict[str, str]:
    """Readiness check endpoint.

    Returns:
        Readiness status.
    """
    if getattr(request.app.state, "store", None) is None:
        return {"status": "starting"}
    return {"status": "ready"}


@router.get("/shutdown")
async def shutdown(request: Request) -> dict[str, str]:
    """Ask the running server to stop after this response."""
    server = request.app.state.server
    if not server.allow_shutdown:
        raise NotFoundError("Unknown endpoint: /shutdown")
    server.request_shutdown()
    return {"status": "shutting_down"}
