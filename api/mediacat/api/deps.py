from fastapi import Depends
from redis.asyncio import Redis

from mediacat.core.config import settings
from mediacat.services.clients import get_redis, get_s3_client
from mediacat.services.media_catalog import MediaCatalog
from mediacat.services.upload_authorizer import UploadAuthorizer


def get_store() -> Redis:
    return get_redis()


def get_upload_authorizer() -> UploadAuthorizer:
    return UploadAuthorizer(get_s3_client(), expires_in=settings.presign_expires_seconds)


def get_media_catalog(
    redis: Redis = Depends(get_store),
    authorizer: UploadAuthorizer = Depends(get_upload_authorizer),
) -> MediaCatalog:
    return MediaCatalog(
        redis,
        authorizer,
        bucket=settings.storage_bucket,
        endpoint_url=settings.storage_endpoint_url,
    )
