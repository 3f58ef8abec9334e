"""Content negotiation for responses and request bodies."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from taskgraph.errors import UnsupportedFormatError, ValidationError


class Format(StrEnum):
    """Encodings the view layer can produce."""

    JSON = "application/json"
    XML = "application/xml"


DEFAULT_FORMAT = Format.JSON

_ALIASES: dict[str, Format] = {
    "application/json": Format.JSON,
    "text/json": Format.JSON,
    "application/xml": Format.XML,
    "text/xml": Format.XML,
}


@dataclass(frozen=True)
class MediaRange:
    """One entry of an Accept header."""

    media_type: str
    quality: float = 1.0

    def matches(self, fmt: Format) -> bool:
        if self.media_type in ("*/*", "application/*"):
            return True
        return _ALIASES.get(self.media_type) == fmt


def parse_accept(header: str | None) -> list[MediaRange]:
    """Parse an Accept header into media ranges, highest quality first.

    Entries keep header order among equal qualities.
    """
    if not header:
        return []
    ranges: list[MediaRange] = []
    for part in header.split(","):
        pieces = [p.strip() for p in part.split(";")]
        media_type = pieces[0].lower()
        if not media_type:
            continue
        quality = 1.0
        for param in pieces[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        ranges.append(MediaRange(media_type, quality))
    return sorted(ranges, key=lambda r: -r.quality)


def negotiate(accept: str | None, default: Format = DEFAULT_FORMAT) -> Format:
    """Choose a response format from an Accept header.

    Unknown media types fall back to ``default``. A header that excludes
    every producible format with ``q=0`` cannot be satisfied.

    Raises:
        UnsupportedFormatError: If every producible format is refused.
    """
    ranges = parse_accept(accept)
    if not ranges:
        return default

    for media_range in ranges:
        if media_range.quality <= 0:
            continue
        if media_range.media_type in ("*/*", "application/*"):
            if not _refused(ranges, default):
                return default
            continue
        fmt = _ALIASES.get(media_range.media_type)
        if fmt is not None and not _refused(ranges, fmt):
            return fmt

    if all(_refused(ranges, fmt) for fmt in Format):
        raise UnsupportedFormatError(accept or "")
    if not _refused(ranges, default):
        return default
    return next(fmt for fmt in Format if not _refused(ranges, fmt))


def _refused(ranges: list[MediaRange], fmt: Format) -> bool:
    """True when the most specific range matching ``fmt`` has ``q=0``."""
    exact = [r for r in ranges if r.media_type not in ("*/*", "application/*")]
    for media_range in exact:
        if media_range.matches(fmt):
            return media_range.quality <= 0
    for media_range in ranges:
        if media_range.matches(fmt):
            return media_range.quality <= 0
    return False


def request_format(content_type: str | None) -> Format:
    """Resolve the encoding of a request body from its Content-Type.

    A missing Content-Type is read as JSON.

    Raises:
        UnsupportedFormatError: For any other explicit media type.
    """
    if not content_type:
        return Format.JSON
    media_type = content_type.split(";")[0].strip().lower()
    if not media_type or media_type == "*/*":
        return Format.JSON
    fmt = _ALIASES.get(media_type)
    if fmt is None:
        raise UnsupportedFormatError(media_type, request_body=True)
    return fmt


def parse_body(raw: bytes, fmt: Format) -> dict[str, Any]:
    """Decode a request body into a flat field mapping.

    An empty body decodes to an empty mapping.

    Raises:
        ValidationError: If the body is malformed or not an object.
    """
    if not raw.strip():
        return {}
    if fmt == Format.XML:
        return _parse_xml(raw)
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"Invalid JSON payload: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON payload: expected an object")
    return data


def _parse_xml(raw: bytes) -> dict[str, Any]:
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise ValidationError(f"Invalid XML payload: {e}") from e
    fields: dict[str, Any] = {}
    for child in root:
        if len(child):
            raise ValidationError(f"Invalid XML payload: nested element <{child.tag}>")
        fields[child.tag] = child.text or ""
    return fields
