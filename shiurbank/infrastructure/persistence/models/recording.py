"""Recording ORM models: uploaded shiurim and user favorites."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shiurbank.infrastructure.persistence.database import Base


class ShiurRecording(Base):
    """One recorded shiur. s3_file_path is the object key inside the series bucket."""

    __tablename__ = "shiur_recordings"

    recording_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shiur_series.series_id", ondelete="CASCADE"), nullable=False
    )
    s3_file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    keyword_1: Mapped[str] = mapped_column(String(100), nullable=False)
    keyword_2: Mapped[str] = mapped_column(String(100), nullable=False)
    keyword_3: Mapped[str] = mapped_column(String(100), nullable=False)
    keyword_4: Mapped[str] = mapped_column(String(100), nullable=False)
    keyword_5: Mapped[str] = mapped_column(String(100), nullable=False)
    keyword_6: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_shiur_recordings_series_recorded", "series_id", "recorded_at"),
    )

    @property
    def keywords(self) -> list[str]:
        return [
            self.keyword_1,
            self.keyword_2,
            self.keyword_3,
            self.keyword_4,
            self.keyword_5,
            self.keyword_6,
        ]


class FavoriteShiur(Base):
    __tablename__ = "favorite_shiurim"

    favorite_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    recording_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("shiur_recordings.recording_id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "recording_id", name="uq_favorite_shiurim_user_recording"),
    )
