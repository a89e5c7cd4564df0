"""Storage: S3 and local filesystem backends, one bucket per series.

Factory creates the backend from shiurbank.core.config. Implementations are
loaded lazily inside StorageFactory.create_storage_service() and satisfy
shiurbank.application.interfaces.storage.IStorageService.
"""

from shiurbank.infrastructure.external.storage.factory import StorageFactory

__all__ = ["StorageFactory"]
