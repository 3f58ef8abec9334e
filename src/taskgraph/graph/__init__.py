"""In-memory entity graph and relation catalog.

Public API:
- EntityGraph: Nodes per entity kind plus typed edge indexes
- RelationKind: Relation catalog descriptor
- get_relation / relations_from / mirror_of: Catalog lookups

Types:
- EntityKind, EntityEntry, ProjectEntry, TodoEntry, CategoryEntry
"""

from taskgraph.graph.graph import Edge, EntityGraph, NodeKey, make_edge
from taskgraph.graph.relations import (
    RelationKind,
    get_relation,
    mirror_of,
    register_relation,
    relations_from,
)
from taskgraph.graph.types import (
    ENTRY_TYPES,
    CategoryEntry,
    EntityEntry,
    EntityKind,
    ProjectEntry,
    TodoEntry,
)

__all__ = [
    "ENTRY_TYPES",
    "CategoryEntry",
    "Edge",
    "EntityEntry",
    "EntityGraph",
    "EntityKind",
    "NodeKey",
    "ProjectEntry",
    "RelationKind",
    "TodoEntry",
    "get_relation",
    "make_edge",
    "mirror_of",
    "register_relation",
    "relations_from",
]
