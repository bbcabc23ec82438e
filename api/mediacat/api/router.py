"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import media, tags

api_router = APIRouter()
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
