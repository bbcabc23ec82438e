from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from mediacat.api.deps import get_media_catalog
from mediacat.schema.tag import TagCreate
from mediacat.services.media_catalog import MediaCatalog

router = APIRouter()


@router.get("", response_model=list[str])
async def list_tags(catalog: MediaCatalog = Depends(get_media_catalog)) -> list[str]:
    return await catalog.list_tags()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_class=Response,
    response_model=None,
)
async def create_tag_endpoint(
    payload: TagCreate,
    catalog: MediaCatalog = Depends(get_media_catalog),
) -> Response:
    await catalog.create_tag(payload.name)
    return Response(status_code=status.HTTP_201_CREATED)
