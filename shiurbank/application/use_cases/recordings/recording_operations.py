"""Recording operations: validated upload to the series bucket, and per-series listing."""

from __future__ import annotations

import logging
from datetime import datetime

from shiurbank.application.dtos.recording import (
    RecordingCreate,
    RecordingResult,
    RecordingUpload,
    UploadedRecording,
)
from shiurbank.application.interfaces.repositories import (
    IRecordingRepository,
    ISeriesRepository,
)
from shiurbank.application.interfaces.services import INotificationService
from shiurbank.application.interfaces.storage import IStorageService
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.services.notification_messages import new_recording_notice
from shiurbank.core.constants import (
    KEYWORD_COUNT,
    audio_content_type,
    file_extension,
    is_audio_file,
    recording_key,
    series_bucket_name,
)
from shiurbank.domain.enums import RecordingSort
from shiurbank.domain.exceptions import ValidationException
from shiurbank.shared.telemetry import traced

logger = logging.getLogger(__name__)

NO_FILE = "No file provided."
FILE_TOO_LARGE = "File size exceeds 1GB limit."
INVALID_FILE_TYPE = "Invalid file type. Please upload an audio file."
INVALID_DATETIME = "Invalid date/time format."
MISSING_FIELDS = "All fields except description are required."


def parse_local_datetime(value: str | None) -> datetime:
    """Parse an ISO local date-time ("2024-03-01T19:30" or with seconds).

    Dates without a time and values with a UTC offset are rejected.
    """
    text = (value or "").strip()
    if "T" not in text:
        raise ValueError(f"not a local date-time: {value!r}")
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        raise ValueError(f"unexpected UTC offset: {value!r}")
    return parsed


def validate_upload(upload: RecordingUpload, max_size: int) -> RecordingCreate:
    """Check an upload form in a fixed order; the first failure wins.

    Order: file present, size, extension, recorded-at, required text fields.
    Nothing is written before this passes.
    """
    if upload.file is None or not upload.size:
        raise ValidationException(NO_FILE, field="audioFile")
    if upload.size > max_size:
        raise ValidationException(FILE_TOO_LARGE, field="audioFile")
    if not is_audio_file(upload.filename):
        raise ValidationException(INVALID_FILE_TYPE, field="audioFile")
    try:
        recorded_at = parse_local_datetime(upload.recorded_at)
    except ValueError as e:
        raise ValidationException(INVALID_DATETIME, field="recordedAt") from e

    title = (upload.title or "").strip()
    keywords = [(k or "").strip() for k in upload.keywords]
    if not title or len(keywords) != KEYWORD_COUNT or not all(keywords):
        raise ValidationException(MISSING_FIELDS)

    description = (upload.description or "").strip() or None
    return RecordingCreate(
        series_id=upload.series_id,
        title=title,
        recorded_at=recorded_at,
        keywords=keywords,
        description=description,
        extension=file_extension(upload.filename),
    )


class RecordingUploadService:
    """Single responsibility: validate, insert the recording row, store the audio, notify."""

    def __init__(
        self,
        recording_repo: IRecordingRepository,
        series_repo: ISeriesRepository,
        storage: IStorageService,
        notifier: INotificationService,
        bucket_prefix: str,
        max_upload_size: int,
    ) -> None:
        self.recording_repo = recording_repo
        self.series_repo = series_repo
        self.storage = storage
        self.notifier = notifier
        self.bucket_prefix = bucket_prefix
        self.max_upload_size = max_upload_size

    @traced("recording.upload")
    async def upload(
        self, ctx: AuthorizationContext, upload: RecordingUpload
    ) -> UploadedRecording:
        """Store a new recording for a series the user moderates.

        The row is inserted first to obtain the recording ID used in the
        object key; a storage failure raises so the row rolls back.
        """
        ctx.require_gabbai(
            upload.series_id, "You do not have permission to upload to this series."
        )
        data = validate_upload(upload, self.max_upload_size)

        recording_id = await self.recording_repo.create_recording(data)
        key = recording_key(recording_id, data.extension)
        await self.storage.upload_audio(
            series_bucket_name(self.bucket_prefix, data.series_id),
            key,
            upload.file,
            audio_content_type(upload.filename),
        )
        await self.recording_repo.update_file_path(recording_id, key)
        logger.info(
            "Recording %s uploaded to series %s by %s", recording_id, data.series_id, ctx.username
        )
        await self._notify_subscribers(data)
        return UploadedRecording(recording_id=recording_id, s3_file_path=key)

    async def _notify_subscribers(self, data: RecordingCreate) -> None:
        series = await self.series_repo.get_detail(data.series_id)
        if series is None or not series.sns_topic_arn:
            return
        subject, message = new_recording_notice(
            series,
            data.title,
            data.recorded_at.strftime("%Y-%m-%d %H:%M"),
            data.description,
        )
        try:
            await self.notifier.publish(series.sns_topic_arn, subject, message)
        except Exception as e:
            logger.error("New-recording notice for series %s failed: %s", data.series_id, e)


class RecordingQueryService:
    def __init__(self, recording_repo: IRecordingRepository) -> None:
        self.recording_repo = recording_repo

    async def list_recordings(
        self, series_id: int, sort: str | None = None
    ) -> list[RecordingResult]:
        return await self.recording_repo.list_for_series(series_id, RecordingSort.parse(sort))
