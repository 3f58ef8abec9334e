"""Query/View layer: content negotiation and JSON/XML rendering."""

from taskgraph.views.negotiation import (
    DEFAULT_FORMAT,
    Format,
    negotiate,
    parse_body,
    request_format,
)
from taskgraph.views.render import (
    entity_to_dict,
    render_collection,
    render_entity,
    render_errors,
    render_linked,
)

__all__ = [
    "DEFAULT_FORMAT",
    "Format",
    "entity_to_dict",
    "negotiate",
    "parse_body",
    "render_collection",
    "render_entity",
    "render_errors",
    "render_linked",
    "request_format",
]
