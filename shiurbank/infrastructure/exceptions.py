"""Infrastructure exceptions for object storage, notifications and database control.

Cloud errors extend ShiurBankException so presentation can map them to a
500 response consistently; the vendor reason goes into details (logged
server-side only).
"""

from shiurbank.domain.exceptions import ShiurBankException


class CloudServiceException(ShiurBankException):
    """Base exception for external cloud service failures."""


class StorageNotFoundError(CloudServiceException):
    """Object or bucket not found in storage."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(
            f"File not found: {key}",
            "STORAGE_NOT_FOUND",
            {"bucket": bucket, "key": key},
        )


class StorageUploadError(CloudServiceException):
    """Object upload failed."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        super().__init__(
            "Failed to upload the audio file.",
            "STORAGE_UPLOAD_ERROR",
            {"bucket": bucket, "key": key, "reason": reason},
        )


class StorageDownloadError(CloudServiceException):
    """Object download failed."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to retrieve audio file: {key}",
            "STORAGE_DOWNLOAD_ERROR",
            {"bucket": bucket, "key": key, "reason": reason},
        )


class BucketCreationError(CloudServiceException):
    """Bucket creation failed."""

    def __init__(self, bucket: str, reason: str) -> None:
        super().__init__(
            "Failed to create storage for the series.",
            "BUCKET_CREATION_ERROR",
            {"bucket": bucket, "reason": reason},
        )


class BucketDeletionError(CloudServiceException):
    """Bucket deletion (including emptying it) failed."""

    def __init__(self, bucket: str, reason: str) -> None:
        super().__init__(
            "Failed to delete storage for the series.",
            "BUCKET_DELETION_ERROR",
            {"bucket": bucket, "reason": reason},
        )


class NotificationError(CloudServiceException):
    """A notification topic operation (create, delete, subscribe, publish) failed."""

    def __init__(self, operation: str, target: str | None, reason: str) -> None:
        super().__init__(
            f"Notification service error during {operation}.",
            "NOTIFICATION_ERROR",
            {"operation": operation, "target": target, "reason": reason},
        )


class DatabaseControlError(CloudServiceException):
    """Managed database start/stop request failed."""

    def __init__(self, operation: str, instance_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to {operation} the database instance.",
            "DATABASE_CONTROL_ERROR",
            {"operation": operation, "instance_id": instance_id, "reason": reason},
        )
