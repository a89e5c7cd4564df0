"""Subscriber repository: subscription types and per-series e-mail subscriptions."""

from __future__ import annotations

from sqlalchemy import delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.subscription import (
    SubscriberTypeResult,
    SubscriptionResult,
)
from shiurbank.infrastructure.persistence.models.subscription import (
    Subscriber,
    SubscriberType,
)
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository[Subscriber]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Subscriber)

    async def list_types(self) -> list[SubscriberTypeResult]:
        result = await self.db.execute(select(SubscriberType).order_by(SubscriberType.type_id))
        return [
            SubscriberTypeResult(type_id=t.type_id, name=t.name)
            for t in result.scalars().all()
        ]

    async def type_exists(self, type_id: int) -> bool:
        result = await self.db.execute(
            select(exists().where(SubscriberType.type_id == type_id))
        )
        return bool(result.scalar())

    async def get_user_subscription(
        self, user_id: int, series_id: int
    ) -> SubscriptionResult | None:
        result = await self.db.execute(
            select(Subscriber, SubscriberType.name)
            .outerjoin(SubscriberType, SubscriberType.type_id == Subscriber.subscription_type_id)
            .where(Subscriber.user_id == user_id, Subscriber.series_id == series_id)
            .order_by(Subscriber.subscriber_id)
            .limit(1)
        )
        row = result.first()
        if row is None:
            return None
        s: Subscriber = row[0]
        return SubscriptionResult(
            subscriber_id=s.subscriber_id,
            user_id=s.user_id,
            series_id=s.series_id,
            subscription_type_id=s.subscription_type_id,
            type_name=row[1],
            sns_subscription_arn=s.sns_subscription_arn,
        )

    async def is_subscribed(self, user_id: int, series_id: int, type_id: int) -> bool:
        result = await self.db.execute(
            select(
                exists().where(
                    Subscriber.user_id == user_id,
                    Subscriber.series_id == series_id,
                    Subscriber.subscription_type_id == type_id,
                )
            )
        )
        return bool(result.scalar())

    async def add_subscription(
        self, user_id: int, series_id: int, type_id: int, subscription_arn: str
    ) -> int:
        row = await self.create(
            Subscriber(
                user_id=user_id,
                series_id=series_id,
                subscription_type_id=type_id,
                sns_subscription_arn=subscription_arn,
            )
        )
        return row.subscriber_id

    async def remove_subscription(self, user_id: int, series_id: int) -> int:
        result = await self.db.execute(
            delete(Subscriber).where(
                Subscriber.user_id == user_id, Subscriber.series_id == series_id
            )
        )
        return result.rowcount

    async def update_arn(self, user_id: int, series_id: int, subscription_arn: str) -> None:
        await self.db.execute(
            update(Subscriber)
            .where(Subscriber.user_id == user_id, Subscriber.series_id == series_id)
            .values(sns_subscription_arn=subscription_arn)
        )
