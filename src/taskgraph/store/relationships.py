"""Relationship Index: typed links between entities.

Operations are driven by ``RelationKind`` catalog entries. Mirrored kinds
write or remove the reverse edge together with the forward edge; all other
kinds touch exactly one stored side.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taskgraph.errors import NotFoundError
from taskgraph.graph.graph import make_edge
from taskgraph.graph.relations import RelationKind, mirror_of
from taskgraph.store.entities import parse_id

if TYPE_CHECKING:
    from taskgraph.graph.graph import Edge, EntityGraph, NodeKey
    from taskgraph.graph.types import EntityEntry, EntityKind

logger = logging.getLogger(__name__)


class RelationshipIndex:
    """Link CRUD over an ``EntityGraph``."""

    def __init__(self, graph: EntityGraph) -> None:
        self._graph = graph

    def link(
        self,
        relation: RelationKind,
        from_id: int | str,
        to_id: int | str,
    ) -> bool:
        """Link ``from_id`` to ``to_id``.

        Returns:
            True if a new edge was written, False if it already existed.

        Raises:
            NotFoundError: If either entity does not exist.
        """
        source = self._require(relation.source, from_id)
        target = self._require(relation.target, to_id)

        sides = [(relation.edge_type, source, target)]
        reverse = mirror_of(relation)
        if reverse is not None:
            sides.append((reverse.edge_type, target, source))

        # Both sides are checked before anything is written
        missing = [
            (edge_type, src, dst)
            for edge_type, src, dst in sides
            if self._graph.find_edge(src, dst, edge_type) is None
        ]
        if not missing:
            return False

        for edge_type, src, dst in missing:
            self._graph.add_edge(make_edge(edge_type, src, dst))
        logger.info(
            "relation_linked",
            extra={"relation": relation.edge_type, "from": source[1], "to": target[1]},
        )
        return True

    def unlink(
        self,
        relation: RelationKind,
        from_id: int | str,
        to_id: int | str,
    ) -> None:
        """Remove the edge ``from_id`` -> ``to_id`` and its mirror.

        Raises:
            NotFoundError: If ``from_id`` or the edge does not exist.
        """
        source = self._require(relation.source, from_id)
        target_id = parse_id(to_id)
        edge = None
        if target_id is not None:
            edge = self._graph.find_edge(
                source, (relation.target, target_id), relation.edge_type
            )
        if edge is None:
            raise NotFoundError(
                f"Could not find any instances with "
                f"{relation.source.plural}/{from_id}/{relation.name}/{to_id}"
            )

        self._graph.remove_edge(edge.id)
        reverse = mirror_of(relation)
        if reverse is not None:
            mirrored = self._graph.find_edge(edge.target, source, reverse.edge_type)
            if mirrored is not None:
                self._graph.remove_edge(mirrored.id)
        logger.info(
            "relation_unlinked",
            extra={"relation": relation.edge_type, "from": source[1], "to": edge.target_id},
        )

    def linked_ids(self, relation: RelationKind, from_id: int) -> list[int]:
        """Target ids linked from an entity, in link order (no existence check)."""
        edges = self._graph.get_outgoing((relation.source, from_id), relation.edge_type)
        return [e.target_id for e in edges]

    def list_linked(
        self,
        relation: RelationKind,
        from_id: int | str,
    ) -> list[EntityEntry]:
        """Entities linked from ``from_id`` through ``relation``.

        Raises:
            NotFoundError: If ``from_id`` does not exist.
        """
        source = self._require(relation.source, from_id)
        linked: list[EntityEntry] = []
        for target_id in self.linked_ids(relation, source[1]):
            entry = self._graph.get_node(relation.target, target_id)
            if entry is not None:
                linked.append(entry)
        return linked

    def has_any(self, relation: RelationKind, from_id: int | str) -> bool:
        source = self._require(relation.source, from_id)
        return bool(self.linked_ids(relation, source[1]))

    def remove_entity(self, kind: EntityKind, entity_id: int) -> int:
        """Drop every edge referencing an entity, on every relation kind.

        Mirrored edges are regular stored edges, so removing all incoming and
        outgoing edges of the node clears both sides. Returns the number of
        edges removed.
        """
        removed: list[Edge] = self._graph.remove_edges_for_node((kind, entity_id))
        return len(removed)

    def _require(self, kind: EntityKind, entity_id: int | str) -> NodeKey:
        parsed = parse_id(entity_id)
        if parsed is None or not self._graph.has_node(kind, parsed):
            raise NotFoundError(
                f"Could not find an instance with {kind.plural}/{entity_id}"
            )
        return (kind, parsed)

