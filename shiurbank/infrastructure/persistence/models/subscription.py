"""Subscription ORM models: subscriber types and per-series subscriptions."""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shiurbank.infrastructure.persistence.database import Base


class SubscriberType(Base):
    __tablename__ = "subscriber_types"

    type_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)


class Subscriber(Base):
    """E-mail subscription to a series topic.

    sns_subscription_arn holds "pending confirmation" until the user confirms
    the e-mail and sync-status stores the real ARN.
    """

    __tablename__ = "subscribers"

    subscriber_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False
    )
    series_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("shiur_series.series_id", ondelete="CASCADE"), nullable=False
    )
    subscription_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subscriber_types.type_id"), nullable=False
    )
    sns_subscription_arn: Mapped[str | None] = mapped_column(String(512), nullable=True)

    __table_args__ = (Index("ix_subscribers_user_series", "user_id", "series_id"),)
