"""Tag-indexed media catalog backed by Redis.

Invariants:
- Every id in ``tags:<tag>`` has a ``media:<id>`` hash whose tag list holds ``<tag>``.
- Every tag on a record is in ``tags`` and its own index set.
- Neither invariant is transactional: create_media pipelines its writes without
  MULTI/EXEC, so a failed command leaves earlier ones applied.
"""

from __future__ import annotations

import json
import logging
import posixpath
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence
from urllib.parse import urlsplit, urlunsplit

from redis.asyncio import Redis
from redis.exceptions import RedisError

from mediacat.services import catalog_keys
from mediacat.services.errors import RecordDecodeError, StoreError
from mediacat.services.identifiers import generate_media_id
from mediacat.services.upload_authorizer import UploadAuthorization, UploadAuthorizer

logger = logging.getLogger("mediacat.services.catalog")


@dataclass(slots=True)
class MediaRecord:
    """A catalogued media item as returned by listings."""

    id: str
    name: str
    url: str
    tags: list[str] = field(default_factory=list)


class MediaCatalog:
    """Create and query tags and media records.

    The catalog holds no state of its own; every call goes to Redis and
    concurrent calls only get Redis' per-command atomicity.
    """

    def __init__(
        self,
        redis: Redis,
        authorizer: UploadAuthorizer,
        *,
        bucket: str,
        endpoint_url: str = "",
        id_factory: Callable[[], str] = generate_media_id,
    ) -> None:
        self._redis = redis
        self._authorizer = authorizer
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self._id_factory = id_factory

    async def create_tag(self, name: str) -> None:
        """Add ``name`` to the global tag set; re-adding is a no-op."""
        try:
            await self._redis.sadd(catalog_keys.TAGS_KEY, name)
        except RedisError as exc:
            raise StoreError("creating tag", exc) from exc

    async def list_tags(self) -> list[str]:
        try:
            members = await self._redis.smembers(catalog_keys.TAGS_KEY)
        except RedisError as exc:
            raise StoreError("listing tags", exc) from exc
        return sorted(_text(member) for member in members)

    async def list_media(self, tag: str) -> list[MediaRecord]:
        """Return every record indexed under ``tag``, oldest first.

        Implementation notes:
        - One SMEMBERS for the index, then one pipelined HGETALL per id.
        - Index entries whose record was never written are skipped and logged.
        - Any store or decode failure aborts the whole listing.
        """
        try:
            members = await self._redis.smembers(catalog_keys.tag_index_key(tag))
        except RedisError as exc:
            raise StoreError("listing media keys", exc) from exc
        media_ids = sorted(_text(member) for member in members)
        if not media_ids:
            return []

        try:
            async with self._redis.pipeline(transaction=False) as pipe:
                for media_id in media_ids:
                    pipe.hgetall(catalog_keys.media_key(media_id))
                replies = await pipe.execute(raise_on_error=False)
        except RedisError as exc:
            raise StoreError("getting media records", exc) from exc

        records: list[MediaRecord] = []
        for i, (media_id, reply) in enumerate(zip(media_ids, replies)):
            if isinstance(reply, Exception):
                raise StoreError("getting media record", reply, index=i) from reply
            if isinstance(reply, dict) and not reply:
                _log_event("media_record_missing", media_id=media_id, tag=tag)
                continue
            try:
                name, tags = catalog_keys.decode_record(reply)
            except RecordDecodeError as exc:
                raise RecordDecodeError("decoding media record", exc, index=i) from exc
            records.append(MediaRecord(id=media_id, name=name, url=self.object_url(media_id), tags=tags))
        return records

    async def create_media(self, name: str, tags: Sequence[str]) -> UploadAuthorization:
        """Register a media record and return a presigned upload for it.

        The authorization is obtained before the metadata is written, so a
        client may hold a valid URL for a record that failed to persist.
        """
        media_id = self._id_factory()
        authorization = await self._authorizer.authorize(self.bucket, media_id)

        try:
            async with self._redis.pipeline(transaction=False) as pipe:
                pipe.hset(catalog_keys.media_key(media_id), mapping=catalog_keys.encode_record(name, tags))
                for tag in tags:
                    pipe.sadd(catalog_keys.TAGS_KEY, tag)
                    pipe.sadd(catalog_keys.tag_index_key(tag), media_id)
                replies = await pipe.execute(raise_on_error=False)
        except RedisError as exc:
            _log_event("media_create_failed", media_id=media_id, error=str(exc))
            raise StoreError("executing batch", exc) from exc

        for i, reply in enumerate(replies):
            if isinstance(reply, Exception):
                _log_event("media_create_failed", media_id=media_id, command=i, error=str(reply))
                raise StoreError("executing command", reply, index=i) from reply

        _log_event("media_created", media_id=media_id, tags=len(tags))
        return authorization

    def object_url(self, media_id: str) -> str:
        """Join the endpoint base, bucket and id as URL path segments."""
        parts = urlsplit(self.endpoint_url)
        path = posixpath.normpath(posixpath.join("/", parts.path, self.bucket, media_id))
        return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def _text(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


def _log_event(event: str, **context: Any) -> None:
    level = logging.WARNING if event.endswith(("_failed", "_missing")) else logging.INFO
    logger.log(level, json.dumps({"event": event, **context}))


__all__ = ["MediaCatalog", "MediaRecord"]
