"""Media identifier generation."""

from __future__ import annotations

from uuid6 import uuid7

from mediacat.services.errors import IdentifierGenerationError


def generate_media_id() -> str:
    """Return a new UUIDv7 string; these sort lexicographically by creation time."""
    try:
        return str(uuid7())
    except (OSError, ValueError) as exc:
        raise IdentifierGenerationError("generating media id", exc) from exc
