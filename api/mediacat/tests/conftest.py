"""Shared pytest fixtures for catalog and API tests."""

from __future__ import annotations

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_BUCKET", "media")
os.environ.setdefault("STORAGE_ENDPOINT_URL", "http://storage.test:9000")

import boto3
import pytest
import pytest_asyncio
from botocore.config import Config as BotoConfig
from httpx import ASGITransport, AsyncClient

from mediacat.api import deps
from mediacat.main import app
from mediacat.services.media_catalog import MediaCatalog
from mediacat.services.upload_authorizer import UploadAuthorizer
from mediacat.tests.fakes import FakeRedis

ENDPOINT_URL = "http://storage.test:9000"
BUCKET = "media"


@pytest.fixture()
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture()
def s3_client():
    # Presigning is computed locally; these credentials never reach a server.
    return boto3.client(
        "s3",
        region_name="us-east-1",
        endpoint_url=ENDPOINT_URL,
        aws_access_key_id="test-access-key",
        aws_secret_access_key="test-secret-key",
        config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


@pytest.fixture()
def authorizer(s3_client) -> UploadAuthorizer:
    return UploadAuthorizer(s3_client, expires_in=900)


@pytest.fixture()
def catalog(fake_redis, authorizer) -> MediaCatalog:
    return MediaCatalog(fake_redis, authorizer, bucket=BUCKET, endpoint_url=ENDPOINT_URL)


@pytest_asyncio.fixture()
async def client(fake_redis, authorizer) -> AsyncClient:
    app.dependency_overrides[deps.get_store] = lambda: fake_redis
    app.dependency_overrides[deps.get_upload_authorizer] = lambda: authorizer
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()
