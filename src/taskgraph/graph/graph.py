"""Core in-memory entity graph data structure.

Entities are kept in per-kind dicts; relations are typed edges with
adjacency indexes. All queries run against memory; nothing is persisted.
"""

from __future__ import annotations

import uuid
from collections import defaultdict
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict

from taskgraph.graph.types import EntityEntry, EntityKind

# (kind, id) uniquely identifies a node; ids are only unique within a kind
NodeKey = tuple[EntityKind, int]


class Edge(BaseModel):
    """Typed, directed edge between two entities."""

    model_config = ConfigDict(frozen=True)

    id: str
    edge_type: str  # "project.tasks", "category.todos", etc.
    source_type: EntityKind
    source_id: int
    target_type: EntityKind
    target_id: int

    @property
    def source(self) -> NodeKey:
        return (self.source_type, self.source_id)

    @property
    def target(self) -> NodeKey:
        return (self.target_type, self.target_id)


def make_edge(
    edge_type: str,
    source: NodeKey,
    target: NodeKey,
) -> Edge:
    return Edge(
        id=f"e-{uuid.uuid4().hex}",
        edge_type=edge_type,
        source_type=source[0],
        source_id=source[1],
        target_type=target[0],
        target_id=target[1],
    )


@dataclass
class EntityGraph:
    """In-memory entity graph. All store queries run against this."""

    nodes: dict[EntityKind, dict[int, EntityEntry]] = field(
        default_factory=lambda: {kind: {} for kind in EntityKind}
    )

    # Ids ever handed out per kind; never reissued after deletion
    _issued_ids: defaultdict[EntityKind, set[int]] = field(
        default_factory=lambda: defaultdict(set)
    )
    _next_id: defaultdict[EntityKind, int] = field(
        default_factory=lambda: defaultdict(lambda: 1)
    )

    # Edges and adjacency indexes
    edges: dict[str, Edge] = field(default_factory=dict)
    _outgoing: defaultdict[NodeKey, list[str]] = field(
        default_factory=lambda: defaultdict(list)
    )
    _incoming: defaultdict[NodeKey, list[str]] = field(
        default_factory=lambda: defaultdict(list)
    )

    # -- Id allocation --

    def allocate_id(self, kind: EntityKind, requested: int | None = None) -> int:
        """Reserve an id for a new entity of ``kind``.

        A requested id is honoured when it has never been issued; otherwise
        the next unissued value from the monotonic counter is used.
        """
        issued = self._issued_ids[kind]
        if requested is not None and requested > 0 and requested not in issued:
            issued.add(requested)
            return requested

        candidate = self._next_id[kind]
        while candidate in issued:
            candidate += 1
        issued.add(candidate)
        self._next_id[kind] = candidate + 1
        return candidate

    # -- Node operations --

    def add_node(self, entry: EntityEntry) -> None:
        self.nodes[entry.kind][entry.id] = entry

    def get_node(self, kind: EntityKind, node_id: int) -> EntityEntry | None:
        return self.nodes[kind].get(node_id)

    def has_node(self, kind: EntityKind, node_id: int) -> bool:
        return node_id in self.nodes[kind]

    def get_nodes(self, kind: EntityKind) -> list[EntityEntry]:
        """All live entities of a kind in insertion order."""
        return list(self.nodes[kind].values())

    def remove_node(self, kind: EntityKind, node_id: int) -> list[Edge]:
        """Remove a node and every edge touching it.

        Returns the removed edges.
        """
        removed = self.remove_edges_for_node((kind, node_id))
        self.nodes[kind].pop(node_id, None)
        return removed

    def remove_edges_for_node(self, node: NodeKey) -> list[Edge]:
        """Remove all edges connected to a node (incoming and outgoing)."""
        edge_ids: list[str] = []
        for eid in [*self._outgoing.get(node, []), *self._incoming.get(node, [])]:
            if eid not in edge_ids:
                edge_ids.append(eid)

        removed: list[Edge] = []
        for eid in edge_ids:
            edge = self.remove_edge(eid)
            if edge is not None:
                removed.append(edge)

        # Drop empty index entries so deleted nodes leave nothing behind
        if node in self._outgoing and not self._outgoing[node]:
            del self._outgoing[node]
        if node in self._incoming and not self._incoming[node]:
            del self._incoming[node]

        return removed

    # -- Edge operations --

    def add_edge(self, edge: Edge) -> None:
        """Add edge and update adjacency indexes.

        If an edge with the same ID already exists, the old adjacency
        entries are removed first to prevent duplicates in the index lists.
        """
        old = self.edges.get(edge.id)
        if old is not None:
            self._remove_from_index(old)

        self.edges[edge.id] = edge
        self._outgoing[edge.source].append(edge.id)
        self._incoming[edge.target].append(edge.id)

    def _remove_from_index(self, edge: Edge) -> None:
        """Remove an edge from adjacency indexes (but not from self.edges)."""
        for index, key in (
            (self._outgoing, edge.source),
            (self._incoming, edge.target),
        ):
            ids = index.get(key)
            if ids and edge.id in ids:
                ids.remove(edge.id)

    def remove_edge(self, edge_id: str) -> Edge | None:
        """Hard-remove edge from all indexes, returning it if it existed."""
        edge = self.edges.pop(edge_id, None)
        if edge is None:
            return None
        self._remove_from_index(edge)
        return edge

    def get_outgoing(self, node: NodeKey, edge_type: str | None = None) -> list[Edge]:
        """Get outgoing edges, optionally filtered by type."""
        return self._collect(self._outgoing.get(node, []), edge_type)

    def _collect(self, edge_ids: list[str], edge_type: str | None) -> list[Edge]:
        results: list[Edge] = []
        for eid in edge_ids:
            edge = self.edges.get(eid)
            if edge is None:
                continue
            if edge_type and edge.edge_type != edge_type:
                continue
            results.append(edge)
        return results

    def find_edge(
        self,
        source: NodeKey,
        target: NodeKey,
        edge_type: str,
    ) -> Edge | None:
        """Find an existing edge by source, target, and type.

        Used to keep relation membership free of duplicates.
        """
        for eid in self._outgoing.get(source, []):
            edge = self.edges.get(eid)
            if edge and edge.edge_type == edge_type and edge.target == target:
                return edge
        return None
