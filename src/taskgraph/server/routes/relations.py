"""Relationship routes, one set per relation catalog entry.

- POST   /{collection}/{id}/{relation}             link (body carries target id)
- GET    /{collection}/{id}/{relation}             list linked entities
- HEAD   /{collection}/{id}/{relation}             existence probe, GET headers
- DELETE /{collection}/{id}/{relation}/{other_id}  unlink
"""

import logging

from fastapi import APIRouter, Request, Response

from taskgraph.errors import NotFoundError, ValidationError
from taskgraph.graph.relations import RelationKind, get_relation
from taskgraph.server.responses import encoded, get_store, read_fields, response_format
from taskgraph.server.routes.entities import resolve_kind
from taskgraph.views import render_errors, render_linked

router = APIRouter()
logger = logging.getLogger(__name__)


def resolve_relation(collection: str, relation_name: str) -> RelationKind:
    kind = resolve_kind(collection)
    relation = get_relation(kind, relation_name)
    if relation is None:
        raise NotFoundError(f"Unknown relationship: {collection}/{relation_name}")
    return relation


@router.api_route("/{collection}/{entity_id}/{relation_name}", methods=["GET", "HEAD"])
async def list_linked(
    collection: str,
    entity_id: str,
    relation_name: str,
    request: Request,
) -> Response:
    relation = resolve_relation(collection, relation_name)
    fmt = response_format(request)
    store = get_store(request)
    head = request.method == "HEAD"

    try:
        # HEAD skips building summaries when there is nothing linked
        if head and not await store.has_any(relation, entity_id):
            entries = []
        else:
            entries = await store.list_linked(relation, entity_id)
    except NotFoundError as e:
        logger.info(
            "relation_source_not_found",
            extra={"relation": relation.edge_type, "entity_id": entity_id},
        )
        # Listings keep their collection keys even when the owner is missing
        keys = dict.fromkeys([relation.target.plural, relation.name])
        body = render_errors([e.message], fmt, collections=keys)
        return encoded(body, fmt, status_code=404, head=head)

    return encoded(render_linked(relation.target, entries, fmt), fmt, head=head)


@router.post("/{collection}/{entity_id}/{relation_name}")
async def create_link(
    collection: str,
    entity_id: str,
    relation_name: str,
    request: Request,
) -> Response:
    relation = resolve_relation(collection, relation_name)
    fields = await read_fields(request)
    target_id = fields.get("id")
    if target_id in (None, ""):
        raise ValidationError(
            f"id : field is mandatory to link {relation.target.plural}"
        )

    await get_store(request).link(relation, entity_id, target_id)
    return Response(status_code=201)


@router.delete("/{collection}/{entity_id}/{relation_name}/{other_id}")
async def delete_link(
    collection: str,
    entity_id: str,
    relation_name: str,
    other_id: str,
    request: Request,
) -> Response:
    relation = resolve_relation(collection, relation_name)
    await get_store(request).unlink(relation, entity_id, other_id)
    return Response(status_code=200)
