"""Request/response helpers shared by the route modules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import Request, Response

from taskgraph.views import Format, negotiate, parse_body, request_format

if TYPE_CHECKING:
    from taskgraph.store import TaskStore

logger = logging.getLogger(__name__)


def get_store(request: Request) -> TaskStore:
    return request.app.state.store


def response_format(request: Request) -> Format:
    """Negotiate the response encoding from the Accept header."""
    default = getattr(request.app.state, "default_format", Format.JSON)
    fmt = negotiate(request.headers.get("accept"), default=default)
    logger.debug("format_negotiated", extra={"format": fmt.value})
    return fmt


async def read_fields(request: Request) -> dict[str, Any]:
    """Decode the request body into a field mapping."""
    fmt = request_format(request.headers.get("content-type"))
    return parse_body(await request.body(), fmt)


def encoded(
    body: bytes,
    fmt: Format,
    status_code: int = 200,
    *,
    head: bool = False,
) -> Response:
    """Build a response; HEAD responses keep the headers but drop the body."""
    if head:
        return Response(
            status_code=status_code,
            media_type=fmt.value,
            headers={"content-length": str(len(body))},
        )
    return Response(content=body, status_code=status_code, media_type=fmt.value)
