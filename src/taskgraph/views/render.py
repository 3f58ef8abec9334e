"""Render entities and relationship listings as JSON or XML.

Shapes:
- Collection: ``{"todos": [...]}`` / ``<todos><todo>...</todo></todos>``
- Entity: the bare entity object / ``<todo>...</todo>``
- Errors: ``{"errorMessages": [...]}`` / ``<errorMessages><errorMessage>``
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from taskgraph.views.negotiation import Format

if TYPE_CHECKING:
    from taskgraph.graph.types import EntityEntry, EntityKind
    from taskgraph.store.store import EntityView


def entity_to_dict(view: EntityView) -> dict[str, Any]:
    """Full entity shape: scalar fields plus non-empty relation id lists."""
    data = view.entry.to_dict()
    for relation, ids in view.links:
        if ids:
            data[relation.name] = [{"id": str(i)} for i in ids]
    return data


def render_entity(view: EntityView, fmt: Format) -> bytes:
    if fmt == Format.XML:
        return _to_bytes(_entity_element(view))
    return _dump_json(entity_to_dict(view))


def render_collection(
    kind: EntityKind,
    views: Iterable[EntityView],
    fmt: Format,
) -> bytes:
    if fmt == Format.XML:
        root = ET.Element(kind.plural)
        for view in views:
            root.append(_entity_element(view))
        return _to_bytes(root)
    return _dump_json({kind.plural: [entity_to_dict(v) for v in views]})


def render_linked(
    kind: EntityKind,
    entries: Iterable[EntityEntry],
    fmt: Format,
) -> bytes:
    """Relationship listing: summaries of the linked ``kind`` entities."""
    if fmt == Format.XML:
        root = ET.Element(kind.plural)
        for entry in entries:
            root.append(_fields_element(kind.value, entry.summary()))
        return _to_bytes(root)
    return _dump_json({kind.plural: [entry.summary() for entry in entries]})


def render_errors(
    messages: list[str],
    fmt: Format,
    *,
    collections: Iterable[str] = (),
) -> bytes:
    """Error body; each name in ``collections`` gets an empty list."""
    if fmt == Format.XML:
        root = ET.Element("errorMessages")
        for message in messages:
            ET.SubElement(root, "errorMessage").text = message
        return _to_bytes(root)
    data: dict[str, Any] = {}
    for name in collections:
        data[name] = []
    data["errorMessages"] = messages
    return _dump_json(data)


def _entity_element(view: EntityView) -> ET.Element:
    element = _fields_element(view.entry.kind.value, view.entry.to_dict())
    for relation, ids in view.links:
        if not ids:
            continue
        rel_element = ET.SubElement(element, relation.name)
        for target_id in ids:
            item = ET.SubElement(rel_element, relation.target.value)
            ET.SubElement(item, "id").text = str(target_id)
    return element


def _fields_element(tag: str, fields: dict[str, Any]) -> ET.Element:
    element = ET.Element(tag)
    for name, value in fields.items():
        ET.SubElement(element, name).text = _xml_text(value)
    return element


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_bytes(element: ET.Element) -> bytes:
    return ET.tostring(element, encoding="utf-8", xml_declaration=False)


def _dump_json(data: dict[str, Any]) -> bytes:
    return json.dumps(data).encode("utf-8")
