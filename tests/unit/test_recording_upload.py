"""Upload validation order and RecordingUploadService with mocked ports."""

import io
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from shiurbank.application.dtos.recording import RecordingUpload
from shiurbank.application.dtos.series import SeriesDetail
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.use_cases.recordings.recording_operations import (
    FILE_TOO_LARGE,
    INVALID_DATETIME,
    INVALID_FILE_TYPE,
    MISSING_FIELDS,
    NO_FILE,
    RecordingUploadService,
    parse_local_datetime,
    validate_upload,
)
from shiurbank.domain.exceptions import AuthorizationException, ValidationException

MAX_SIZE = 1024


def _upload(**overrides) -> RecordingUpload:
    values = {
        "series_id": 3,
        "title": "Hilchos Shabbos",
        "recorded_at": "2024-03-01T19:30",
        "keywords": ["shabbos", "melacha", "bishul", "borer", "kiddush", "havdalah"],
        "description": None,
        "filename": "shiur.mp3",
        "size": 10,
        "file": io.BytesIO(b"0123456789"),
    }
    values.update(overrides)
    return RecordingUpload(**values)


def _message(upload: RecordingUpload) -> str:
    with pytest.raises(ValidationException) as exc_info:
        validate_upload(upload, MAX_SIZE)
    return exc_info.value.message


def test_valid_upload() -> None:
    data = validate_upload(_upload(description="  "), MAX_SIZE)
    assert data.title == "Hilchos Shabbos"
    assert data.recorded_at == datetime(2024, 3, 1, 19, 30)
    assert data.extension == "mp3"
    assert data.description is None


def test_checks_run_in_order() -> None:
    assert _message(_upload(file=None, size=None, filename="shiur.xyz")) == NO_FILE
    assert _message(_upload(size=MAX_SIZE + 1, filename="shiur.xyz")) == FILE_TOO_LARGE
    assert _message(_upload(filename="shiur.xyz", recorded_at="bad")) == INVALID_FILE_TYPE
    assert _message(_upload(recorded_at="2024-03-01", title="")) == INVALID_DATETIME
    assert _message(_upload(title="  ")) == MISSING_FIELDS


def test_missing_keyword_rejected() -> None:
    keywords = ["a1", "b2", "c3", "d4", "e5", None]
    assert _message(_upload(keywords=keywords)) == MISSING_FIELDS


def test_extension_is_case_insensitive() -> None:
    assert validate_upload(_upload(filename="SHIUR.M4A"), MAX_SIZE).extension == "m4a"


def test_parse_local_datetime_rejects_offsets() -> None:
    assert parse_local_datetime("2024-03-01T19:30:15") == datetime(2024, 3, 1, 19, 30, 15)
    with pytest.raises(ValueError):
        parse_local_datetime("2024-03-01T19:30+02:00")
    with pytest.raises(ValueError):
        parse_local_datetime(None)


@pytest.fixture
def upload_mocks():
    recording_repo = AsyncMock()
    recording_repo.create_recording = AsyncMock(return_value=42)
    series_repo = AsyncMock()
    series_repo.get_detail = AsyncMock(
        return_value=SeriesDetail(
            series_id=3,
            rebbi_id=1,
            topic_id=1,
            inst_id=1,
            description=None,
            requires_permission=False,
            sns_topic_arn="arn:aws:sns:us-east-1:000000000000:shiurbank-series-3",
            rebbi_name="Rabbi Moshe Cohen",
            topic_name="Halacha",
            institution_name="Yeshiva University",
        )
    )
    storage = AsyncMock()
    notifier = AsyncMock()
    svc = RecordingUploadService(
        recording_repo=recording_repo,
        series_repo=series_repo,
        storage=storage,
        notifier=notifier,
        bucket_prefix="shiurbank-series",
        max_upload_size=MAX_SIZE,
    )
    return svc, recording_repo, storage, notifier


GABBAI = AuthorizationContext(user_id=1, username="gabbai", gabbai_series_ids=frozenset({3}))


async def test_upload_stores_under_recording_key(upload_mocks) -> None:
    svc, recording_repo, storage, notifier = upload_mocks

    result = await svc.upload(GABBAI, _upload())

    assert result.recording_id == 42
    assert result.s3_file_path == "recordings/42.mp3"
    bucket, key, _, content_type = storage.upload_audio.await_args.args
    assert (bucket, key, content_type) == ("shiurbank-series-3", "recordings/42.mp3", "audio/mpeg")
    recording_repo.update_file_path.assert_awaited_once_with(42, "recordings/42.mp3")
    notifier.publish.assert_awaited_once()


async def test_invalid_file_type_writes_nothing(upload_mocks) -> None:
    svc, recording_repo, storage, _ = upload_mocks

    with pytest.raises(ValidationException):
        await svc.upload(GABBAI, _upload(filename="shiur.xyz"))

    recording_repo.create_recording.assert_not_awaited()
    storage.upload_audio.assert_not_awaited()


async def test_non_gabbai_cannot_upload(upload_mocks) -> None:
    svc, recording_repo, _, _ = upload_mocks
    ctx = AuthorizationContext(user_id=2, username="talmid", participant_series_ids=frozenset({3}))

    with pytest.raises(AuthorizationException):
        await svc.upload(ctx, _upload())
    recording_repo.create_recording.assert_not_awaited()


async def test_notification_failure_does_not_fail_upload(upload_mocks) -> None:
    svc, _, _, notifier = upload_mocks
    notifier.publish.side_effect = RuntimeError("sns down")

    result = await svc.upload(GABBAI, _upload())

    assert result.recording_id == 42


async def test_storage_failure_propagates(upload_mocks) -> None:
    svc, recording_repo, storage, _ = upload_mocks
    storage.upload_audio.side_effect = RuntimeError("s3 down")

    with pytest.raises(RuntimeError):
        await svc.upload(GABBAI, _upload())
    recording_repo.update_file_path.assert_not_awaited()
