"""DTOs for recording upload and listing (no dependency on ORM)."""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO


@dataclass(frozen=True)
class RecordingResult:
    recording_id: int
    series_id: int
    title: str
    description: str | None
    recorded_at: datetime
    keywords: list[str]
    s3_file_path: str

    @property
    def file_name(self) -> str:
        """Object key without its folder, as used in the stream URL."""
        return self.s3_file_path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class RecordingUpload:
    """Raw upload form; validated by RecordingUploadService before any write."""

    series_id: int
    title: str | None
    recorded_at: str | None
    keywords: list[str | None]
    description: str | None
    filename: str | None
    size: int | None
    file: BinaryIO | None


@dataclass(frozen=True)
class RecordingCreate:
    """Validated recording fields ready for insertion."""

    series_id: int
    title: str
    recorded_at: datetime
    keywords: list[str]
    description: str | None
    extension: str


@dataclass(frozen=True)
class UploadedRecording:
    recording_id: int
    s3_file_path: str


@dataclass(frozen=True)
class AudioObject:
    """A stored audio object opened for streaming."""

    key: str
    content_type: str
    content_length: int | None
    chunks: AsyncIterator[bytes]
