"""Entity store and relationship index.

Public API:
- TaskStore: Lock-serialized async facade used by the HTTP layer
- create_task_store: Factory to create a (optionally seeded) store

Internal:
- EntityStore, RelationshipIndex: Synchronous operations over EntityGraph
"""

from taskgraph.store.entities import EntityStore
from taskgraph.store.relationships import RelationshipIndex
from taskgraph.store.store import EntityView, TaskStore, create_task_store

__all__ = [
    "EntityStore",
    "EntityView",
    "RelationshipIndex",
    "TaskStore",
    "create_task_store",
]
