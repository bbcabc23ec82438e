"""Presigned S3 upload authorizations."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from botocore.exceptions import BotoCoreError, ClientError

from mediacat.services.errors import UploadAuthorizationError

DEFAULT_EXPIRES_SECONDS = 900

logger = logging.getLogger("mediacat.services.uploads")


@dataclass(slots=True)
class UploadAuthorization:
    """HTTP request a client must replay to place object bytes in storage."""

    method: str
    url: str
    signed_headers: dict[str, list[str]] = field(default_factory=dict)


class UploadAuthorizer:
    """Thin wrapper around a boto3 S3 client's ``put_object`` presigning."""

    def __init__(self, s3_client: Any, *, expires_in: int = DEFAULT_EXPIRES_SECONDS) -> None:
        self._client = s3_client
        self.expires_in = expires_in

    async def authorize(self, bucket: str, object_key: str) -> UploadAuthorization:
        """Presign a PUT for ``bucket/object_key``; nothing is uploaded here."""

        def _presign() -> str:
            return self._client.generate_presigned_url(
                "put_object",
                Params={"Bucket": bucket, "Key": object_key},
                ExpiresIn=self.expires_in,
                HttpMethod="PUT",
            )

        try:
            url = await asyncio.to_thread(_presign)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Presigning %s/%s failed: %s", bucket, object_key, exc)
            raise UploadAuthorizationError("presigning put object", exc) from exc

        host = urlsplit(url).netloc
        return UploadAuthorization(method="PUT", url=url, signed_headers={"Host": [host]})
