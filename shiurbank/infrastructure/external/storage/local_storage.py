"""Local filesystem storage: a bucket is a directory under storage_root."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import BinaryIO

import aiofiles
import aiofiles.os

from shiurbank.application.dtos.recording import AudioObject
from shiurbank.core.constants import audio_content_type, is_audio_file
from shiurbank.infrastructure.exceptions import (
    BucketCreationError,
    BucketDeletionError,
    StorageDownloadError,
    StorageNotFoundError,
    StorageUploadError,
)

logger = logging.getLogger(__name__)


class LocalStorageService:
    """Filesystem storage for development and tests.

    Paths are validated against storage_root. Writes use temp file + rename.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, storage_root: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory; one subdirectory per bucket.
        """
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _bucket_path(self, bucket: str) -> Path:
        path = (self.storage_root / bucket).resolve()
        if path.parent != self.storage_root:
            raise StorageNotFoundError(bucket, "")
        return path

    def _object_path(self, bucket: str, key: str) -> Path:
        """Resolve key inside bucket. Raises StorageNotFoundError on traversal."""
        bucket_path = self._bucket_path(bucket)
        path = (bucket_path / key).resolve()
        try:
            path.relative_to(bucket_path)
        except ValueError as e:
            raise StorageNotFoundError(bucket, key) from e
        return path

    async def create_bucket(self, bucket: str) -> None:
        try:
            self._bucket_path(bucket).mkdir(parents=True, exist_ok=True, mode=0o750)
        except Exception as e:
            raise BucketCreationError(bucket, str(e)) from e

    async def delete_bucket(self, bucket: str) -> None:
        try:
            path = self._bucket_path(bucket)
            if path.exists():
                shutil.rmtree(path)
        except Exception as e:
            raise BucketDeletionError(bucket, str(e)) from e

    async def upload_audio(
        self, bucket: str, key: str, file_data: BinaryIO, content_type: str
    ) -> None:
        """Atomic write (temp file + rename) in CHUNK_SIZE pieces."""
        try:
            bucket_path = self._bucket_path(bucket)
            if not bucket_path.is_dir():
                raise FileNotFoundError(f"Bucket does not exist: {bucket}")
            target = self._object_path(bucket, key)
            target.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target.parent, prefix=".tmp_", suffix=target.suffix
            )
            os.close(temp_fd)
            try:
                file_data.seek(0)
                async with aiofiles.open(temp_path, "wb") as f:
                    while True:
                        chunk = file_data.read(self.CHUNK_SIZE)
                        if not chunk:
                            break
                        await f.write(chunk)
                os.replace(temp_path, target)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except Exception as e:
            raise StorageUploadError(bucket, key, str(e)) from e
        logger.debug("Stored %s/%s (%s)", bucket, key, content_type)

    async def open_audio(self, bucket: str, key: str) -> AudioObject:
        path = self._object_path(bucket, key)
        if not path.is_file():
            raise StorageNotFoundError(bucket, key)
        stat = await aiofiles.os.stat(path)
        return AudioObject(
            key=key,
            content_type=audio_content_type(key),
            content_length=stat.st_size,
            chunks=self._iter_file(path, bucket, key),
        )

    async def _iter_file(self, path: Path, bucket: str, key: str) -> AsyncIterator[bytes]:
        try:
            async with aiofiles.open(path, "rb") as f:
                while True:
                    chunk = await f.read(self.CHUNK_SIZE)
                    if not chunk:
                        break
                    yield chunk
        except Exception as e:
            raise StorageDownloadError(bucket, key, str(e)) from e

    async def list_audio(self, bucket: str) -> list[str]:
        path = self._bucket_path(bucket)
        if not path.is_dir():
            raise StorageNotFoundError(bucket, "")
        return sorted(
            p.relative_to(path).as_posix()
            for p in path.rglob("*")
            if p.is_file() and is_audio_file(p.name)
        )
