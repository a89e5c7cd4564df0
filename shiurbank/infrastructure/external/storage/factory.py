"""Storage service factory: creates S3 or local backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shiurbank.application.interfaces.storage import IStorageService

if TYPE_CHECKING:
    from shiurbank.core.config import Settings


class StorageFactory:
    """Factory for storage service instances based on configuration."""

    @staticmethod
    def create_storage_service(settings: "Settings | None" = None) -> IStorageService:
        """Create storage service from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            S3StorageService or LocalStorageService.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from shiurbank.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from shiurbank.infrastructure.external.storage.local_storage import (
                LocalStorageService,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalStorageService(storage_root=s.storage_root)
        if backend == "s3":
            from shiurbank.infrastructure.external.aws import create_client
            from shiurbank.infrastructure.external.storage.s3_storage import (
                S3StorageService,
            )

            return S3StorageService(create_client("s3", s), region=s.aws_region)
        raise ValueError(f"Unknown storage backend: {backend}. Supported: 'local', 's3'")
