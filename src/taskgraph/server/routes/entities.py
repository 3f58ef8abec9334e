"""Entity CRUD routes: /{collection} and /{collection}/{id}."""

import logging

from fastapi import APIRouter, Request, Response

from taskgraph.errors import NotFoundError
from taskgraph.graph.types import EntityKind
from taskgraph.server.responses import encoded, get_store, read_fields, response_format
from taskgraph.views import render_collection, render_entity

router = APIRouter()
logger = logging.getLogger(__name__)


def resolve_kind(collection: str) -> EntityKind:
    kind = EntityKind.from_plural(collection)
    if kind is None:
        raise NotFoundError(f"Unknown collection: {collection}")
    return kind


@router.api_route("/{collection}", methods=["GET", "HEAD"])
async def list_entities(collection: str, request: Request) -> Response:
    kind = resolve_kind(collection)
    fmt = response_format(request)
    views = await get_store(request).list(kind, dict(request.query_params))
    return encoded(
        render_collection(kind, views, fmt), fmt, head=request.method == "HEAD"
    )


@router.post("/{collection}")
async def create_entity(collection: str, request: Request) -> Response:
    kind = resolve_kind(collection)
    fmt = response_format(request)
    fields = await read_fields(request)
    view = await get_store(request).create(kind, fields)
    return encoded(render_entity(view, fmt), fmt, status_code=201)


@router.api_route("/{collection}/{entity_id}", methods=["GET", "HEAD"])
async def get_entity(collection: str, entity_id: str, request: Request) -> Response:
    kind = resolve_kind(collection)
    fmt = response_format(request)
    view = await get_store(request).get(kind, entity_id)
    return encoded(
        render_collection(kind, [view], fmt), fmt, head=request.method == "HEAD"
    )


@router.put("/{collection}/{entity_id}")
@router.post("/{collection}/{entity_id}")
async def update_entity(collection: str, entity_id: str, request: Request) -> Response:
    """Partial update; POST is accepted as an alias for amending."""
    kind = resolve_kind(collection)
    fmt = response_format(request)
    fields = await read_fields(request)
    view = await get_store(request).update(kind, entity_id, fields)
    return encoded(render_entity(view, fmt), fmt)


@router.delete("/{collection}/{entity_id}")
async def delete_entity(collection: str, entity_id: str, request: Request) -> Response:
    kind = resolve_kind(collection)
    await get_store(request).delete(kind, entity_id)
    return Response(status_code=200)
