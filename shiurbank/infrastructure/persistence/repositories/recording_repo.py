"""Recording repository: insert, attach the stored object key, list per series."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.recording import RecordingCreate, RecordingResult
from shiurbank.domain.enums import RecordingSort
from shiurbank.infrastructure.persistence.models.recording import ShiurRecording
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository

# Placeholder key until the upload has finished and the real key is known.
PENDING_FILE_PATH = "pending-upload"


def _to_result(r: ShiurRecording) -> RecordingResult:
    return RecordingResult(
        recording_id=r.recording_id,
        series_id=r.series_id,
        title=r.title,
        description=r.description,
        recorded_at=r.recorded_at,
        keywords=r.keywords,
        s3_file_path=r.s3_file_path,
    )


class RecordingRepository(BaseRepository[ShiurRecording]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ShiurRecording)

    async def create_recording(self, data: RecordingCreate) -> int:
        k = data.keywords
        row = await self.create(
            ShiurRecording(
                series_id=data.series_id,
                s3_file_path=PENDING_FILE_PATH,
                title=data.title,
                recorded_at=data.recorded_at,
                keyword_1=k[0],
                keyword_2=k[1],
                keyword_3=k[2],
                keyword_4=k[3],
                keyword_5=k[4],
                keyword_6=k[5],
                description=data.description,
            )
        )
        return row.recording_id

    async def update_file_path(self, recording_id: int, s3_file_path: str) -> None:
        await self.db.execute(
            update(ShiurRecording)
            .where(ShiurRecording.recording_id == recording_id)
            .values(s3_file_path=s3_file_path)
        )

    async def list_for_series(
        self, series_id: int, sort: RecordingSort = RecordingSort.NEWEST
    ) -> list[RecordingResult]:
        order = (
            ShiurRecording.recorded_at.asc()
            if sort is RecordingSort.OLDEST
            else ShiurRecording.recorded_at.desc()
        )
        result = await self.db.execute(
            select(ShiurRecording)
            .where(ShiurRecording.series_id == series_id)
            .order_by(order, ShiurRecording.recording_id)
        )
        return [_to_result(r) for r in result.scalars().all()]
