"""Redis key names and value encodings for the media catalog.

Layout:
- ``tags``            set of every tag ever created
- ``tags:<tag>``      set of media ids carrying ``<tag>``
- ``media:<id>``      hash with ``name`` and ``tags`` fields

Tag names are appended to the index prefix as-is. Every index key starts with
``tags:`` so the tag -> key mapping stays injective and never overlaps
``tags`` or ``media:*``.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping
from urllib.parse import quote_plus, unquote_plus

from mediacat.services.errors import RecordDecodeError

TAGS_KEY = "tags"
TAG_INDEX_PREFIX = TAGS_KEY + ":"
MEDIA_PREFIX = "media:"
NAME_FIELD = "name"
TAGS_FIELD = "tags"
TAG_SEPARATOR = ","

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def tag_index_key(tag: str) -> str:
    return TAG_INDEX_PREFIX + tag


def media_key(media_id: str) -> str:
    return MEDIA_PREFIX + media_id


def encode_tag(tag: str) -> str:
    """Form-encode a single tag; ``,`` ``%`` ``+`` and spaces never survive raw."""
    return quote_plus(tag, safe="")


def decode_tag(segment: str, *, position: int = 0) -> str:
    """Reverse :func:`encode_tag`, rejecting malformed escapes."""
    if _BAD_ESCAPE_RE.search(segment):
        raise RecordDecodeError("decoding tag", f"invalid escape in {segment!r}", index=position)
    try:
        return unquote_plus(segment, errors="strict")
    except UnicodeDecodeError as exc:
        raise RecordDecodeError("decoding tag", exc, index=position) from exc


def encode_tags(tags: Iterable[str]) -> str:
    return TAG_SEPARATOR.join(encode_tag(tag) for tag in tags)


def decode_tags(value: str) -> list[str]:
    """Split a stored tag field and decode every segment in order."""
    return [decode_tag(segment, position=i) for i, segment in enumerate(value.split(TAG_SEPARATOR))]


def encode_record(name: str, tags: Iterable[str]) -> dict[str, str]:
    """Flatten a media record into the hash fields stored under ``media:<id>``."""
    return {NAME_FIELD: name, TAGS_FIELD: encode_tags(tags)}


def decode_record(raw: Any) -> tuple[str, list[str]]:
    """Return ``(name, tags)`` from an ``HGETALL`` reply; absent fields read as empty."""
    if not isinstance(raw, Mapping):
        raise RecordDecodeError("decoding record", f"expected a field map, got {type(raw).__name__}")
    fields = {_as_text(key): _as_text(value) for key, value in raw.items()}
    return fields.get(NAME_FIELD, ""), decode_tags(fields.get(TAGS_FIELD, ""))


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RecordDecodeError("decoding record", exc) from exc
    if isinstance(value, str):
        return value
    raise RecordDecodeError("decoding record", f"unexpected field type {type(value).__name__}")
