"""Task store facade.

``TaskStore`` owns the entity graph and serializes every operation behind a
single store-wide lock, so concurrent requests never observe a half-written
mirrored link or link to an entity that is being deleted.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from builtins import list as builtin_list
from dataclasses import dataclass, field
from typing import Any

from taskgraph.graph.graph import EntityGraph
from taskgraph.graph.relations import RelationKind, relations_from
from taskgraph.graph.types import EntityEntry, EntityKind
from taskgraph.store.entities import EntityStore
from taskgraph.store.relationships import RelationshipIndex

logger = logging.getLogger(__name__)


@dataclass
class EntityView:
    """Snapshot of an entity plus the ids it links to, per relation."""

    entry: EntityEntry
    links: builtin_list[tuple[RelationKind, builtin_list[int]]] = field(
        default_factory=list
    )


class TaskStore:
    """Async facade over the Entity Store and Relationship Index."""

    def __init__(self, graph: EntityGraph | None = None) -> None:
        self._graph = graph if graph is not None else EntityGraph()
        self._relationships = RelationshipIndex(self._graph)
        self._entities = EntityStore(self._graph, self._relationships)
        self._lock = asyncio.Lock()

    @property
    def graph(self) -> EntityGraph:
        return self._graph

    # -- Entities --

    async def create(self, kind: EntityKind, fields: dict[str, Any]) -> EntityView:
        async with self._lock:
            return self._view(self._entities.create(kind, fields))

    async def get(self, kind: EntityKind, entity_id: int | str) -> EntityView:
        async with self._lock:
            return self._view(self._entities.get(kind, entity_id))

    async def list(
        self,
        kind: EntityKind,
        filters: dict[str, str] | None = None,
    ) -> builtin_list[EntityView]:
        async with self._lock:
            return [self._view(e) for e in self._entities.list(kind, filters)]

    async def update(
        self,
        kind: EntityKind,
        entity_id: int | str,
        fields: dict[str, Any],
    ) -> EntityView:
        async with self._lock:
            return self._view(self._entities.update(kind, entity_id, fields))

    async def delete(self, kind: EntityKind, entity_id: int | str) -> None:
        async with self._lock:
            self._entities.delete(kind, entity_id)

    # -- Relationships --

    async def link(
        self,
        relation: RelationKind,
        from_id: int | str,
        to_id: int | str,
    ) -> bool:
        async with self._lock:
            return self._relationships.link(relation, from_id, to_id)

    async def unlink(
        self,
        relation: RelationKind,
        from_id: int | str,
        to_id: int | str,
    ) -> None:
        async with self._lock:
            self._relationships.unlink(relation, from_id, to_id)

    async def list_linked(
        self,
        relation: RelationKind,
        from_id: int | str,
    ) -> builtin_list[EntityEntry]:
        async with self._lock:
            return [
                dataclasses.replace(e)
                for e in self._relationships.list_linked(relation, from_id)
            ]

    async def has_any(self, relation: RelationKind, from_id: int | str) -> bool:
        async with self._lock:
            return self._relationships.has_any(relation, from_id)

    def _view(self, entry: EntityEntry) -> EntityView:
        links = [
            (relation, self._relationships.linked_ids(relation, entry.id))
            for relation in relations_from(entry.kind)
        ]
        return EntityView(entry=dataclasses.replace(entry), links=links)


def create_task_store(*, seed_demo_data: bool = False) -> TaskStore:
    """Create an empty store, optionally loaded with the demo data set."""
    store = TaskStore()
    if seed_demo_data:
        from taskgraph.store.seed import load_demo_data

        load_demo_data(store.graph)
        logger.info("demo_data_loaded")
    return store
