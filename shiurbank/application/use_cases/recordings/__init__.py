"""Recording use cases: upload (write) and per-series listing (read)."""

from shiurbank.application.use_cases.recordings.recording_operations import (
    RecordingQueryService,
    RecordingUploadService,
)

__all__ = ["RecordingQueryService", "RecordingUploadService"]
