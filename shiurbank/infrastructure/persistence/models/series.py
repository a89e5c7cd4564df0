"""Series ORM models: the series itself, its gabbaim, participants and pending rows."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from shiurbank.infrastructure.persistence.database import Base
from shiurbank.infrastructure.persistence.models.mixins import CreatedAtMixin


class ShiurSeries(CreatedAtMixin, Base):
    """A lecture series (one rebbi, one topic, one institution)."""

    __tablename__ = "shiur_series"

    series_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rebbi_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rebbeim.rebbi_id"), nullable=False, index=True
    )
    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("topics.topic_id"), nullable=False, index=True
    )
    inst_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("institutions.inst_id"), nullable=False, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    requires_permission: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=false(), default=False
    )
    sns_topic_arn: Mapped[str | None] = mapped_column(String(512), nullable=True)


class Gabbai(Base):
    """Moderator of a series."""

    __tablename__ = "gabbaim"

    gabbai_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shiur_series.series_id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "series_id", name="uq_gabbaim_user_series"),
        Index("ix_gabbaim_series_id", "series_id"),
    )


class ShiurParticipant(Base):
    """Participant roster: users with access to a series' content."""

    __tablename__ = "shiur_participants"

    participant_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shiur_series.series_id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "series_id", name="uq_shiur_participants_user_series"),
        Index("ix_shiur_participants_series_id", "series_id"),
    )


class PendingParticipant(CreatedAtMixin, Base):
    """Application to join a restricted series, waiting for a gabbai's decision."""

    __tablename__ = "users_pending_approval_to_series"

    pending_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shiur_series.series_id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "series_id", name="uq_pending_participant_user_series"),
        Index("ix_pending_participant_series_id", "series_id"),
    )


class SeriesPendingApproval(CreatedAtMixin, Base):
    """New series waiting for admin verification."""

    __tablename__ = "series_pending_approval"

    pending_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("shiur_series.series_id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
