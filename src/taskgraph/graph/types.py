"""Entity kinds and entity records stored in the graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar


class EntityKind(StrEnum):
    """Entity kinds managed by the store."""

    PROJECT = "project"
    TODO = "todo"
    CATEGORY = "category"

    @property
    def plural(self) -> str:
        return _PLURALS[self]

    @classmethod
    def from_plural(cls, plural: str) -> EntityKind | None:
        """Resolve a collection name such as ``todos`` to its kind."""
        for kind, name in _PLURALS.items():
            if name == plural:
                return kind
        return None


_PLURALS: dict[EntityKind, str] = {
    EntityKind.PROJECT: "projects",
    EntityKind.TODO: "todos",
    EntityKind.CATEGORY: "categories",
}


@dataclass
class EntityEntry:
    """Fields common to every entity kind.

    ``flag_fields`` maps wire field names to the boolean attributes a kind
    adds on top of title and description.
    """

    id: int
    title: str
    description: str = ""

    kind: ClassVar[EntityKind]
    flag_fields: ClassVar[dict[str, str]] = {}

    @classmethod
    def field_names(cls) -> list[str]:
        """Wire names of the mutable fields, in render order."""
        return ["title", "description", *cls.flag_fields]

    def summary(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
        }

    def to_dict(self) -> dict[str, Any]:
        d = self.summary()
        for wire_name, attr in self.flag_fields.items():
            d[wire_name] = getattr(self, attr)
        return d


@dataclass
class ProjectEntry(EntityEntry):
    completed: bool = False
    active: bool = False

    kind: ClassVar[EntityKind] = EntityKind.PROJECT
    flag_fields: ClassVar[dict[str, str]] = {
        "completed": "completed",
        "active": "active",
    }


@dataclass
class TodoEntry(EntityEntry):
    done_status: bool = False

    kind: ClassVar[EntityKind] = EntityKind.TODO
    flag_fields: ClassVar[dict[str, str]] = {"doneStatus": "done_status"}


@dataclass
class CategoryEntry(EntityEntry):
    kind: ClassVar[EntityKind] = EntityKind.CATEGORY


ENTRY_TYPES: dict[EntityKind, type[EntityEntry]] = {
    EntityKind.PROJECT: ProjectEntry,
    EntityKind.TODO: TodoEntry,
    EntityKind.CATEGORY: CategoryEntry,
}
