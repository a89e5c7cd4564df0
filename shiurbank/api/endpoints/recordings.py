"""Recordings API: list a series' recordings and upload new ones (multipart)."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from shiurbank.api.dependencies import (
    AuthContext,
    CurrentUser,
    get_recording_query_service,
    get_recording_upload_service,
)
from shiurbank.application.dtos.recording import RecordingUpload
from shiurbank.application.use_cases import RecordingQueryService, RecordingUploadService
from shiurbank.domain.exceptions import ValidationException
from shiurbank.schemas.recording import (
    RecordingItem,
    RecordingListResponse,
    RecordingUploadResponse,
)

router = APIRouter()

UploadService = Annotated[RecordingUploadService, Depends(get_recording_upload_service)]
OptionalForm = Annotated[str | None, Form()]


def _upload_size(audio_file: UploadFile) -> int:
    if audio_file.size is not None:
        return audio_file.size
    audio_file.file.seek(0, 2)
    size = audio_file.file.tell()
    audio_file.file.seek(0)
    return size


async def _upload(
    ctx: AuthContext,
    upload_svc: RecordingUploadService,
    series_id: int,
    title: str | None,
    recorded_at: str | None,
    keywords: list[str | None],
    description: str | None,
    audio_file: UploadFile | None,
) -> RecordingUploadResponse:
    has_file = audio_file is not None and bool(audio_file.filename)
    uploaded = await upload_svc.upload(
        ctx,
        RecordingUpload(
            series_id=series_id,
            title=title,
            recorded_at=recorded_at,
            keywords=keywords,
            description=description,
            filename=audio_file.filename if has_file else None,
            size=_upload_size(audio_file) if has_file else None,
            file=audio_file.file if has_file else None,
        ),
    )
    return RecordingUploadResponse(
        recording_id=uploaded.recording_id, message="Shiur uploaded successfully!"
    )


@router.get("/series/{series_id}/recordings", response_model=RecordingListResponse)
async def list_recordings(
    series_id: int,
    _: CurrentUser,
    query_svc: Annotated[RecordingQueryService, Depends(get_recording_query_service)],
    sort: str | None = Query(None, description="newest (default) or oldest"),
):
    recordings = await query_svc.list_recordings(series_id, sort)
    return RecordingListResponse(recordings=[RecordingItem.from_result(r) for r in recordings])


@router.post("/series/{series_id}/recordings", response_model=RecordingUploadResponse)
async def upload_series_recording(
    series_id: int,
    ctx: AuthContext,
    upload_svc: UploadService,
    title: OptionalForm = None,
    recorded_at: Annotated[str | None, Form(alias="recordedAt")] = None,
    keyword1: OptionalForm = None,
    keyword2: OptionalForm = None,
    keyword3: OptionalForm = None,
    keyword4: OptionalForm = None,
    keyword5: OptionalForm = None,
    keyword6: OptionalForm = None,
    description: OptionalForm = None,
    audio_file: Annotated[UploadFile | None, File(alias="audioFile")] = None,
):
    """Upload a recording to a series the user moderates."""
    return await _upload(
        ctx,
        upload_svc,
        series_id,
        title,
        recorded_at,
        [keyword1, keyword2, keyword3, keyword4, keyword5, keyword6],
        description,
        audio_file,
    )


@router.post("/recordings", response_model=RecordingUploadResponse)
async def upload_recording(
    ctx: AuthContext,
    upload_svc: UploadService,
    series_id: Annotated[int | None, Form(alias="seriesId")] = None,
    title: OptionalForm = None,
    recorded_at: Annotated[str | None, Form(alias="recordedAt")] = None,
    keyword1: OptionalForm = None,
    keyword2: OptionalForm = None,
    keyword3: OptionalForm = None,
    keyword4: OptionalForm = None,
    keyword5: OptionalForm = None,
    keyword6: OptionalForm = None,
    description: OptionalForm = None,
    audio_file: Annotated[UploadFile | None, File(alias="audioFile")] = None,
):
    """Same upload with the series named in the form."""
    if series_id is None:
        raise ValidationException("Series ID is required.", field="seriesId")
    return await _upload(
        ctx,
        upload_svc,
        series_id,
        title,
        recorded_at,
        [keyword1, keyword2, keyword3, keyword4, keyword5, keyword6],
        description,
        audio_file,
    )
