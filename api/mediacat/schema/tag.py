"""Tag request schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TagCreate(BaseModel):
    """Payload for creating a new tag."""
    name: str = Field(min_length=1)
