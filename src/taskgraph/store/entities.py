"""Entity Store: create, read, update and delete entity records.

Field values arrive in wire form (JSON or parsed XML), so every mutable field
is validated and coerced here before it reaches the graph.
"""

from __future__ import annotations

import logging
from builtins import list as builtin_list
from typing import TYPE_CHECKING, Any

from taskgraph.errors import NotFoundError, ValidationError
from taskgraph.graph.types import ENTRY_TYPES, EntityEntry, EntityKind

if TYPE_CHECKING:
    from taskgraph.graph.graph import EntityGraph
    from taskgraph.store.relationships import RelationshipIndex

logger = logging.getLogger(__name__)


def parse_id(value: Any) -> int | None:
    """Parse a wire id ("3" or 3). Returns None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        text = value.strip()
        # str.isdigit also accepts non-ASCII digits that int() rejects
        if not (text.isascii() and text.isdigit()):
            return None
        parsed = int(text)
        return parsed if parsed > 0 else None
    return None


def parse_bool(field_name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValidationError(f"{field_name} : should be a boolean (true or false)")


def parse_text(field_name: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} : should be a string")
    return value


def format_wire_value(value: Any) -> str:
    """Render a field value the way it would appear in a query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class EntityStore:
    """Entity CRUD over an ``EntityGraph``.

    Not thread-safe on its own; ``TaskStore`` serializes access.
    """

    def __init__(self, graph: EntityGraph, relationships: RelationshipIndex) -> None:
        self._graph = graph
        self._relationships = relationships

    def create(self, kind: EntityKind, fields: dict[str, Any]) -> EntityEntry:
        entry_type = ENTRY_TYPES[kind]
        values = self._coerce_fields(kind, fields)

        title = values.get("title")
        if not title or not title.strip():
            raise ValidationError("title : field is mandatory")

        requested_id = None
        if "id" in fields and fields["id"] not in (None, ""):
            requested_id = parse_id(fields["id"])
            if requested_id is None:
                raise ValidationError(f"id : invalid value {fields['id']!r}")

        entity_id = self._graph.allocate_id(kind, requested_id)
        entry = entry_type(id=entity_id, title=title)
        self._apply(entry, values)
        self._graph.add_node(entry)
        logger.info(
            "entity_created",
            extra={"kind": kind.value, "entity_id": entity_id},
        )
        return entry

    def get(self, kind: EntityKind, entity_id: int | str) -> EntityEntry:
        parsed = parse_id(entity_id)
        entry = self._graph.get_node(kind, parsed) if parsed is not None else None
        if entry is None:
            raise NotFoundError(
                f"Could not find an instance with {kind.plural}/{entity_id}"
            )
        return entry

    def list(
        self,
        kind: EntityKind,
        filters: dict[str, str] | None = None,
    ) -> builtin_list[EntityEntry]:
        """List entities, optionally keeping only exact matches on fields.

        Filters compare against the wire form of each value; unknown filter
        names are ignored.
        """
        entries = self._graph.get_nodes(kind)
        if not filters:
            return entries

        known = {"id", *ENTRY_TYPES[kind].field_names()}
        active = {k: v for k, v in filters.items() if k in known}
        return [
            entry
            for entry in entries
            if all(
                format_wire_value(entry.to_dict()[name]) == expected
                for name, expected in active.items()
            )
        ]

    def update(
        self,
        kind: EntityKind,
        entity_id: int | str,
        fields: dict[str, Any],
    ) -> EntityEntry:
        entry = self.get(kind, entity_id)

        if "id" in fields and fields["id"] not in (None, ""):
            if parse_id(fields["id"]) != entry.id:
                raise ValidationError("id : field cannot be changed")

        values = self._coerce_fields(kind, fields)
        if "title" in values and not values["title"].strip():
            raise ValidationError("title : field is mandatory")

        self._apply(entry, values)
        logger.info(
            "entity_updated",
            extra={"kind": kind.value, "entity_id": entry.id, "fields": sorted(values)},
        )
        return entry

    def delete(self, kind: EntityKind, entity_id: int | str) -> EntityEntry:
        entry = self.get(kind, entity_id)
        removed = self._relationships.remove_entity(kind, entry.id)
        self._graph.remove_node(kind, entry.id)
        logger.info(
            "entity_deleted",
            extra={
                "kind": kind.value,
                "entity_id": entry.id,
                "edges_removed": removed,
            },
        )
        return entry

    def _coerce_fields(
        self,
        kind: EntityKind,
        fields: dict[str, Any],
    ) -> dict[str, Any]:
        """Validate wire fields and convert them to attribute values."""
        entry_type = ENTRY_TYPES[kind]
        values: dict[str, Any] = {}
        for name, raw in fields.items():
            if name == "id":
                continue
            if name in ("title", "description"):
                values[name] = parse_text(name, raw)
            elif name in entry_type.flag_fields:
                values[entry_type.flag_fields[name]] = parse_bool(name, raw)
            else:
                raise ValidationError(f"Could not find field: {name}")
        return values

    @staticmethod
    def _apply(entry: EntityEntry, values: dict[str, Any]) -> None:
        for attr, value in values.items():
            setattr(entry, attr, value)
