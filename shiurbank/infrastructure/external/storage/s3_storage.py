"""S3 object storage: one bucket per series plus a default bucket for loose audio."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any, BinaryIO

from botocore.exceptions import ClientError

from shiurbank.application.dtos.recording import AudioObject
from shiurbank.core.constants import audio_content_type, is_audio_file
from shiurbank.infrastructure.exceptions import (
    BucketCreationError,
    BucketDeletionError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageUploadError,
)
from shiurbank.infrastructure.external.aws import error_code

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NoSuchBucket", "NotFound"})


class S3StorageService:
    """Bucket-per-series storage on S3.

    Uses boto3 (sync) via asyncio.to_thread for the async API. Streaming reads
    the object body chunk by chunk, each read in a worker thread.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, client: Any, region: str = "us-east-1") -> None:
        """Initialize with a boto3 S3 client.

        Args:
            client: boto3 S3 client (see infrastructure.external.aws.create_client).
            region: Region new buckets are created in.
        """
        self._client = client
        self.region = region

    async def create_bucket(self, bucket: str) -> None:
        """Create bucket; an existing bucket we already own is accepted."""
        def _create() -> None:
            kwargs: dict[str, Any] = {"Bucket": bucket}
            if self.region != "us-east-1":
                kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
            try:
                self._client.create_bucket(**kwargs)
            except ClientError as e:
                if error_code(e) == "BucketAlreadyOwnedByYou":
                    return
                raise

        try:
            await asyncio.to_thread(_create)
        except Exception as e:
            raise BucketCreationError(bucket, str(e)) from e
        logger.info("Created bucket %s", bucket)

    async def delete_bucket(self, bucket: str) -> None:
        """Empty and delete bucket. A missing bucket is not an error."""
        def _delete() -> None:
            paginator = self._client.get_paginator("list_objects_v2")
            try:
                for page in paginator.paginate(Bucket=bucket):
                    objects = [{"Key": o["Key"]} for o in page.get("Contents", [])]
                    if objects:
                        self._client.delete_objects(
                            Bucket=bucket, Delete={"Objects": objects, "Quiet": True}
                        )
                self._client.delete_bucket(Bucket=bucket)
            except ClientError as e:
                if error_code(e) in _NOT_FOUND_CODES:
                    return
                raise

        try:
            await asyncio.to_thread(_delete)
        except Exception as e:
            raise BucketDeletionError(bucket, str(e)) from e
        logger.info("Deleted bucket %s", bucket)

    async def upload_audio(
        self, bucket: str, key: str, file_data: BinaryIO, content_type: str
    ) -> None:
        """Upload with managed (multipart for large files) transfer."""
        def _upload() -> None:
            file_data.seek(0)
            self._client.upload_fileobj(
                file_data, bucket, key, ExtraArgs={"ContentType": content_type}
            )

        try:
            await asyncio.to_thread(_upload)
        except Exception as e:
            raise StorageUploadError(bucket, key, str(e)) from e

    async def open_audio(self, bucket: str, key: str) -> AudioObject:
        """Open object for streaming; Content-Type comes from the extension table."""
        def _get() -> dict[str, Any]:
            try:
                return self._client.get_object(Bucket=bucket, Key=key)
            except ClientError as e:
                if error_code(e) in _NOT_FOUND_CODES:
                    raise StorageNotFoundError(bucket, key) from e
                raise StorageDownloadError(bucket, key, str(e)) from e

        try:
            response = await asyncio.to_thread(_get)
        except (StorageNotFoundError, StorageDownloadError):
            raise
        except Exception as e:
            raise StorageDownloadError(bucket, key, str(e)) from e

        return AudioObject(
            key=key,
            content_type=audio_content_type(key),
            content_length=response.get("ContentLength"),
            chunks=self._iter_body(response["Body"], bucket, key),
        )

    async def _iter_body(self, body: Any, bucket: str, key: str) -> AsyncIterator[bytes]:
        try:
            while True:
                chunk = await asyncio.to_thread(body.read, self.CHUNK_SIZE)
                if not chunk:
                    break
                yield chunk
        except Exception as e:
            raise StorageDownloadError(bucket, key, str(e)) from e
        finally:
            body.close()

    async def list_audio(self, bucket: str) -> list[str]:
        """Audio keys in bucket (every page)."""
        def _list() -> list[str]:
            paginator = self._client.get_paginator("list_objects_v2")
            keys: list[str] = []
            for page in paginator.paginate(Bucket=bucket):
                keys.extend(
                    o["Key"] for o in page.get("Contents", []) if is_audio_file(o["Key"])
                )
            return keys

        try:
            return await asyncio.to_thread(_list)
        except ClientError as e:
            if error_code(e) in _NOT_FOUND_CODES:
                raise StorageNotFoundError(bucket, "") from e
            raise StorageDownloadError(bucket, "", str(e)) from e
