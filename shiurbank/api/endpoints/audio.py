"""Audio API: list the default bucket and stream audio from it or from a series bucket."""

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from shiurbank.api.dependencies import get_audio_service
from shiurbank.application.dtos.recording import AudioObject
from shiurbank.application.use_cases import AudioService
from shiurbank.core.constants import AUDIO_CACHE_CONTROL, audio_content_type
from shiurbank.schemas.recording import AudioListResponse

router = APIRouter()

Audio = Annotated[AudioService, Depends(get_audio_service)]


def _stream(audio: AudioObject, file_name: str) -> StreamingResponse:
    headers = {
        "Cache-Control": AUDIO_CACHE_CONTROL,
        "Content-Disposition": f"inline; filename*=UTF-8''{quote(file_name.rsplit('/', 1)[-1])}",
    }
    if audio.content_length is not None:
        headers["Content-Length"] = str(audio.content_length)
    return StreamingResponse(
        audio.chunks, media_type=audio_content_type(file_name), headers=headers
    )


@router.get("/list", response_model=AudioListResponse)
async def list_audio(audio_svc: Audio):
    return AudioListResponse(files=await audio_svc.list_default())


@router.get("/stream/{file_name:path}")
async def stream_audio(file_name: str, audio_svc: Audio):
    """Stream from the default bucket. Any failure is a 404."""
    return _stream(await audio_svc.open_default(file_name), file_name)


@router.get("/series/{series_id}/stream/{file_name:path}")
async def stream_series_audio(series_id: int, file_name: str, audio_svc: Audio):
    """Stream a recording from the series bucket. Any failure is a 404."""
    return _stream(await audio_svc.open_series(series_id, file_name), file_name)
