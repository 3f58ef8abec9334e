"""Demo data set loaded by ``taskgraph serve --seed``."""

from __future__ import annotations

from taskgraph.graph.graph import EntityGraph
from taskgraph.graph.relations import CATEGORY_PROJECTS, TASKS, TODO_CATEGORIES
from taskgraph.graph.types import EntityKind
from taskgraph.store.entities import EntityStore
from taskgraph.store.relationships import RelationshipIndex


def load_demo_data(graph: EntityGraph) -> None:
    """Populate a fresh graph with a small office/home sample."""
    relationships = RelationshipIndex(graph)
    entities = EntityStore(graph, relationships)

    scan = entities.create(EntityKind.TODO, {"title": "scan paperwork"})
    file_ = entities.create(EntityKind.TODO, {"title": "file paperwork"})
    office_work = entities.create(
        EntityKind.PROJECT,
        {"title": "Office Work", "description": "", "active": False},
    )
    office = entities.create(EntityKind.CATEGORY, {"title": "Office"})
    entities.create(EntityKind.CATEGORY, {"title": "Home"})

    relationships.link(TASKS, office_work.id, scan.id)
    relationships.link(TASKS, office_work.id, file_.id)
    relationships.link(TODO_CATEGORIES, scan.id, office.id)
    relationships.link(CATEGORY_PROJECTS, office.id, office_work.id)
