"""Image attachment storage.

Project images are handed to an ImageStore, which persists the bytes and
returns a durable URL. Two backends are provided:

  - S3ImageStore: AWS S3 or an S3-compatible store (production).
  - LocalImageStore: local filesystem (development, single node).

The backend is selected by ``IMAGE_STORAGE_BACKEND``.
"""

import asyncio
import os
from functools import lru_cache
from pathlib import Path, PurePosixPath
from typing import Protocol
from uuid import uuid4

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from src.atogato.core.config import get_settings
from src.atogato.core.exceptions import UploadError
from src.atogato.core.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "projects"


class ImageStore(Protocol):
    """Persists uploaded image bytes and returns a retrievable URL."""

    async def store(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        """Store one image.

        Raises:
            UploadError: If the bytes could not be persisted.
        """
        ...

    async def ping(self) -> None:
        """Check the backend is reachable and writable.

        Raises:
            UploadError: If it is not.
        """
        ...


def build_key(filename: str) -> str:
    """Build a collision-free object key, keeping the file extension."""
    suffix = PurePosixPath(filename).suffix.lower()
    return f"{KEY_PREFIX}/{uuid4().hex}{suffix}"


class S3ImageStore:
    """Stores images as objects in an S3 bucket."""

    def __init__(
        self,
        client,
        bucket: str,
        region: str,
        public_base_url: str | None = None,
    ):
        self.client = client
        self.bucket = bucket
        self.region = region
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    def url_for(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def store(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        key = build_key(filename)
        extra = {"ContentType": content_type} if content_type else {}
        try:
            # boto3 is blocking
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                **extra,
            )
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to upload {filename}: {e}") from e

        logger.debug("image_stored", backend="s3", bucket=self.bucket, key=key, size=len(data))
        return self.url_for(key)

    async def ping(self) -> None:
        try:
            await asyncio.to_thread(self.client.head_bucket, Bucket=self.bucket)
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Bucket {self.bucket} unavailable: {e}") from e


class LocalImageStore:
    """Stores images under a directory on the local filesystem."""

    def __init__(self, root: str | Path, public_base_url: str):
        self.root = Path(root).resolve()
        self.public_base_url = public_base_url.rstrip("/")

    def _write(self, key: str, data: bytes) -> None:
        path = self.root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def store(self, data: bytes, filename: str, content_type: str | None = None) -> str:
        key = build_key(filename)
        try:
            await asyncio.to_thread(self._write, key, data)
        except OSError as e:
            raise UploadError(f"Failed to upload {filename}: {e}") from e

        logger.debug("image_stored", backend="local", key=key, size=len(data))
        return f"{self.public_base_url}/{key}"

    def _check_writable(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        if not os.access(self.root, os.W_OK):
            raise PermissionError(f"{self.root} is not writable")

    async def ping(self) -> None:
        try:
            await asyncio.to_thread(self._check_writable)
        except OSError as e:
            raise UploadError(f"Image directory unavailable: {e}") from e


def _create_s3_client():
    settings = get_settings()
    return boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        region_name=settings.s3_region,
        config=BotoConfig(
            signature_version="s3v4",
            connect_timeout=5,
            read_timeout=10,
            retries={"max_attempts": 2},
        ),
    )


@lru_cache
def get_image_store() -> ImageStore:
    """Get the configured image store singleton."""
    settings = get_settings()
    if settings.image_storage_backend == "s3":
        return S3ImageStore(
            _create_s3_client(),
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            public_base_url=settings.image_public_base_url,
        )
    return LocalImageStore(
        settings.local_image_dir,
        public_base_url=settings.image_public_base_url or "/media",
    )
