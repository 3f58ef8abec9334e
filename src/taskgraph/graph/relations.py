"""Relation catalog: typed, directed association kinds between entities.

Every association is a ``RelationKind`` descriptor. A relation with a
``mirror`` names the reverse relation on the target kind; linking or
unlinking one side writes the other in the same step. Relations without a
mirror are stored on one side only, even when another relation points the
opposite way between the same kinds (``category.todos`` is not the inverse
of ``todo.categories``).
"""

from __future__ import annotations

from dataclasses import dataclass

from taskgraph.graph.types import EntityKind


@dataclass(frozen=True)
class RelationKind:
    """Catalog entry for one directed relation."""

    name: str  # path segment, e.g. "tasks"
    source: EntityKind
    target: EntityKind
    mirror: str | None = None  # relation name on ``target`` pointing back

    @property
    def edge_type(self) -> str:
        return f"{self.source.value}.{self.name}"

    @property
    def is_mirrored(self) -> bool:
        return self.mirror is not None


_catalog: dict[tuple[EntityKind, str], RelationKind] = {}


def register_relation(relation: RelationKind) -> None:
    """Add a relation kind to the catalog.

    Raises:
        ValueError: If the name is already taken on the source kind, or the
            declared mirror exists but does not point back.
    """
    key = (relation.source, relation.name)
    if key in _catalog:
        raise ValueError(f"relation {relation.edge_type} already registered")
    if relation.mirror is not None:
        reverse = _catalog.get((relation.target, relation.mirror))
        if reverse is not None and (
            reverse.target != relation.source or reverse.mirror != relation.name
        ):
            raise ValueError(
                f"mirror {reverse.edge_type} does not point back to "
                f"{relation.edge_type}"
            )
    _catalog[key] = relation


def get_relation(source: EntityKind, name: str) -> RelationKind | None:
    return _catalog.get((source, name))


def relations_from(source: EntityKind) -> list[RelationKind]:
    """Relations owned by ``source``, in registration order."""
    return [r for r in _catalog.values() if r.source == source]


def mirror_of(relation: RelationKind) -> RelationKind | None:
    """Return the declared reverse relation, if any."""
    if relation.mirror is None:
        return None
    return _catalog.get((relation.target, relation.mirror))


# Project <-> Todo is the only mirrored pair
TASKS = RelationKind("tasks", EntityKind.PROJECT, EntityKind.TODO, mirror="tasksof")
TASKS_OF = RelationKind("tasksof", EntityKind.TODO, EntityKind.PROJECT, mirror="tasks")
TODO_CATEGORIES = RelationKind("categories", EntityKind.TODO, EntityKind.CATEGORY)
CATEGORY_TODOS = RelationKind("todos", EntityKind.CATEGORY, EntityKind.TODO)
PROJECT_CATEGORIES = RelationKind("categories", EntityKind.PROJECT, EntityKind.CATEGORY)
CATEGORY_PROJECTS = RelationKind("projects", EntityKind.CATEGORY, EntityKind.PROJECT)

for _relation in (
    TASKS,
    TASKS_OF,
    TODO_CATEGORIES,
    CATEGORY_TODOS,
    PROJECT_CATEGORIES,
    CATEGORY_PROJECTS,
):
    register_relation(_relation)
