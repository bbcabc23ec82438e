"""Media endpoints for tag listings and upload registration."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from mediacat.api.deps import get_media_catalog
from mediacat.schema.media import MediaCreate, MediaRead, UploadRead
from mediacat.services.media_catalog import MediaCatalog

router = APIRouter()


@router.get("", response_model=list[MediaRead])
async def list_media(
    tag: str = Query(..., description="Only return media carrying this tag"),
    catalog: MediaCatalog = Depends(get_media_catalog),
) -> list[MediaRead]:
    """List media indexed under a tag; unknown tags give an empty list."""
    records = await catalog.list_media(tag)
    return [MediaRead.from_record(record) for record in records]


@router.post("", response_model=UploadRead, status_code=status.HTTP_201_CREATED)
async def create_media_endpoint(
    payload: MediaCreate,
    catalog: MediaCatalog = Depends(get_media_catalog),
) -> UploadRead:
    """Register a media item and return the presigned PUT for its bytes."""
    authorization = await catalog.create_media(payload.name, payload.tags)
    return UploadRead.from_authorization(authorization)
