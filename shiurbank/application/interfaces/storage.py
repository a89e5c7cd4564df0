"""Storage port: bucket-per-series object storage (S3StorageService, LocalStorageService)."""

from typing import BinaryIO, Protocol

from shiurbank.application.dtos.recording import AudioObject


class IStorageService(Protocol):
    """Protocol for bucket-per-series object storage."""

    async def create_bucket(self, bucket: str) -> None:
        """Create bucket. Raises BucketCreationError."""
        ...

    async def delete_bucket(self, bucket: str) -> None:
        """Delete every object in bucket, then the bucket. Raises BucketDeletionError."""
        ...

    async def upload_audio(
        self, bucket: str, key: str, file_data: BinaryIO, content_type: str
    ) -> None:
        """Store file_data under key. Raises StorageUploadError."""
        ...

    async def open_audio(self, bucket: str, key: str) -> AudioObject:
        """Open key for streaming. Raises StorageNotFoundError or StorageDownloadError."""
        ...

    async def list_audio(self, bucket: str) -> list[str]:
        """Keys in bucket whose extension is a supported audio format."""
        ...
