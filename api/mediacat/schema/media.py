"""Media request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mediacat.services.media_catalog import MediaRecord
from mediacat.services.upload_authorizer import UploadAuthorization


class MediaCreate(BaseModel):
    """Payload for registering a media item before upload."""
    name: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)


class MediaRead(BaseModel):
    """Media item returned by tag listings."""
    name: str
    url: str
    tags: list[str]

    @classmethod
    def from_record(cls, record: MediaRecord) -> "MediaRead":
        return cls(name=record.name, url=record.url, tags=record.tags)


class UploadRead(BaseModel):
    """Presigned request the client replays to upload the media bytes."""
    model_config = ConfigDict(populate_by_name=True)

    method: str
    url: str
    signed_header: dict[str, list[str]] = Field(alias="signedHeader")

    @classmethod
    def from_authorization(cls, authorization: UploadAuthorization) -> "UploadRead":
        return cls(method=authorization.method, url=authorization.url, signed_header=authorization.signed_headers)
