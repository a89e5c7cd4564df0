"""Recording and audio API schemas."""

from datetime import datetime

from shiurbank.application.dtos.recording import RecordingResult
from shiurbank.schemas.base import CamelModel, SuccessResponse


class RecordingItem(CamelModel):
    recording_id: int
    series_id: int
    title: str
    description: str | None = None
    recorded_at: datetime
    keywords: list[str]
    file_name: str
    stream_url: str

    @classmethod
    def from_result(cls, r: RecordingResult) -> "RecordingItem":
        return cls(
            recording_id=r.recording_id,
            series_id=r.series_id,
            title=r.title,
            description=r.description,
            recorded_at=r.recorded_at,
            keywords=r.keywords,
            file_name=r.file_name,
            stream_url=f"/api/audio/series/{r.series_id}/stream/{r.file_name}",
        )


class RecordingListResponse(SuccessResponse):
    recordings: list[RecordingItem]


class RecordingUploadResponse(SuccessResponse):
    recording_id: int
    message: str


class AudioListResponse(SuccessResponse):
    files: list[str]
