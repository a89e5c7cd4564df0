"""Audio use case: list and open stored audio for streaming."""

from __future__ import annotations

import logging
from urllib.parse import unquote

from shiurbank.application.dtos.recording import AudioObject
from shiurbank.application.interfaces.storage import IStorageService
from shiurbank.core.constants import RECORDINGS_FOLDER, series_bucket_name
from shiurbank.domain.exceptions import ResourceNotFoundException, ShiurBankException

logger = logging.getLogger(__name__)


def series_object_key(file_name: str) -> str:
    """Key in a series bucket: a bare file name lives in the recordings folder."""
    return file_name if "/" in file_name else f"{RECORDINGS_FOLDER}/{file_name}"


class AudioService:
    """Streams audio from the default bucket or a series bucket. Any failure is a 404."""

    def __init__(
        self, storage: IStorageService, default_bucket: str, bucket_prefix: str
    ) -> None:
        self.storage = storage
        self.default_bucket = default_bucket
        self.bucket_prefix = bucket_prefix

    async def list_default(self) -> list[str]:
        return await self.storage.list_audio(self.default_bucket)

    async def open_default(self, file_name: str) -> AudioObject:
        return await self._open(self.default_bucket, unquote(file_name))

    async def open_series(self, series_id: int, file_name: str) -> AudioObject:
        return await self._open(
            series_bucket_name(self.bucket_prefix, series_id),
            series_object_key(unquote(file_name)),
        )

    async def _open(self, bucket: str, key: str) -> AudioObject:
        try:
            return await self.storage.open_audio(bucket, key)
        except ShiurBankException as e:
            logger.warning("Audio %s/%s unavailable: %s", bucket, key, e)
            raise ResourceNotFoundException("Audio file", key) from e
