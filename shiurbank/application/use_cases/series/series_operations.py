"""Series operations: create (with bucket and topic), delete, details, dashboard listing."""

from __future__ import annotations

import logging

from shiurbank.application.dtos.series import (
    GabbaiCredentials,
    MySeriesItem,
    SeriesCreate,
    SeriesCreated,
    SeriesDetail,
)
from shiurbank.application.interfaces.repositories import (
    IAdminRepository,
    IApplicationRepository,
    IInstitutionRepository,
    IMembershipRepository,
    IRebbiRepository,
    ISeriesRepository,
    ITopicRepository,
    IUserRepository,
)
from shiurbank.application.interfaces.services import INotificationService
from shiurbank.application.interfaces.storage import IStorageService
from shiurbank.application.services.authorization_service import AuthorizationContext
from shiurbank.application.services.notification_messages import (
    series_verification_notice,
)
from shiurbank.core.constants import series_bucket_name, series_topic_name
from shiurbank.domain.exceptions import ResourceNotFoundException, ValidationException
from shiurbank.shared.telemetry import traced

logger = logging.getLogger(__name__)

MISSING_GABBAI_FIELDS = "Each additional gabbai must have both a username and a password."
INVALID_GABBAI_CREDENTIALS = "Additional gabbai credentials are invalid."


class SeriesService:
    """Series lifecycle. Creation provisions the series bucket and notification topic.

    Runs inside the request transaction: a bucket or topic failure raises and
    the inserted rows roll back. Admin notification and cloud clean-up on
    delete are best effort.
    """

    def __init__(
        self,
        series_repo: ISeriesRepository,
        membership_repo: IMembershipRepository,
        application_repo: IApplicationRepository,
        admin_repo: IAdminRepository,
        user_repo: IUserRepository,
        rebbi_repo: IRebbiRepository,
        topic_repo: ITopicRepository,
        institution_repo: IInstitutionRepository,
        storage: IStorageService,
        notifier: INotificationService,
        bucket_prefix: str,
        topic_prefix: str,
    ) -> None:
        self.series_repo = series_repo
        self.membership_repo = membership_repo
        self.application_repo = application_repo
        self.admin_repo = admin_repo
        self.user_repo = user_repo
        self.rebbi_repo = rebbi_repo
        self.topic_repo = topic_repo
        self.institution_repo = institution_repo
        self.storage = storage
        self.notifier = notifier
        self.bucket_prefix = bucket_prefix
        self.topic_prefix = topic_prefix

    async def _validate(
        self,
        rebbi_id: int | None,
        topic_id: int | None,
        inst_id: int | None,
        description: str | None,
    ) -> tuple[int, int, int]:
        if rebbi_id is None or topic_id is None or inst_id is None or not (
            description or ""
        ).strip():
            raise ValidationException("Missing required fields.")
        if not await self.rebbi_repo.exists(rebbi_id):
            raise ValidationException("Unknown rebbi.", field="rebbiId")
        if not await self.topic_repo.exists(topic_id):
            raise ValidationException("Unknown topic.", field="topicId")
        if not await self.institution_repo.exists(inst_id):
            raise ValidationException("Unknown institution.", field="instId")
        return rebbi_id, topic_id, inst_id

    async def _resolve_extra_gabbaim(
        self, creator_id: int, extra: list[GabbaiCredentials]
    ) -> list[int]:
        """Authenticate each co-gabbai; rows left entirely blank are ignored."""
        user_ids: list[int] = []
        for cred in extra:
            username = (cred.username or "").strip()
            password = cred.password or ""
            if not username and not password:
                continue
            if not username or not password:
                raise ValidationException(MISSING_GABBAI_FIELDS)
            user = await self.user_repo.authenticate(username, password)
            if user is None:
                raise ValidationException(INVALID_GABBAI_CREDENTIALS)
            if user.user_id != creator_id and user.user_id not in user_ids:
                user_ids.append(user.user_id)
        return user_ids

    @traced("series.create")
    async def create_series(
        self,
        ctx: AuthorizationContext,
        rebbi_id: int | None,
        topic_id: int | None,
        inst_id: int | None,
        description: str | None,
        requires_permission: bool = False,
        extra_gabbaim: list[GabbaiCredentials] | None = None,
    ) -> SeriesCreated:
        """Create a series; the creator (and any co-gabbaim) become gabbai and participant.

        needs_verification is True unless the creator already moderates a
        series by the same rebbi; such series are queued for an admin.
        """
        rebbi_id, topic_id, inst_id = await self._validate(
            rebbi_id, topic_id, inst_id, description
        )
        extra_ids = await self._resolve_extra_gabbaim(ctx.user_id, extra_gabbaim or [])
        needs_verification = not await self.series_repo.user_moderates_rebbi(
            ctx.user_id, rebbi_id
        )

        series_id = await self.series_repo.create_series(
            SeriesCreate(
                rebbi_id=rebbi_id,
                topic_id=topic_id,
                inst_id=inst_id,
                description=(description or "").strip(),
                requires_permission=requires_permission,
            )
        )
        bucket = series_bucket_name(self.bucket_prefix, series_id)
        await self.storage.create_bucket(bucket)
        try:
            topic_arn = await self.notifier.create_topic(
                series_topic_name(self.topic_prefix, series_id)
            )
        except Exception:
            await self._discard_bucket(bucket)
            raise
        await self.series_repo.set_topic_arn(series_id, topic_arn)

        for user_id in [ctx.user_id, *extra_ids]:
            await self.membership_repo.add_gabbai(user_id, series_id)
            await self.membership_repo.add_participant(user_id, series_id)

        if needs_verification:
            await self.admin_repo.add_series_pending(series_id)
            await self._notify_verification(series_id, ctx.username)

        logger.info(
            "Series %s created by %s (bucket=%s, verification=%s)",
            series_id,
            ctx.username,
            bucket,
            needs_verification,
        )
        return SeriesCreated(
            series_id=series_id,
            needs_verification=needs_verification,
            bucket_name=bucket,
            topic_arn=topic_arn,
        )

    async def _discard_bucket(self, bucket: str) -> None:
        try:
            await self.storage.delete_bucket(bucket)
        except Exception as e:
            logger.error("Could not remove bucket %s after failed creation: %s", bucket, e)

    async def _notify_verification(self, series_id: int, creator: str) -> None:
        series = await self.series_repo.get_detail(series_id)
        if series is None:
            return
        subject, message = series_verification_notice(series, creator)
        try:
            await self.notifier.notify_admins(subject, message)
        except Exception as e:
            logger.error("Failed to send verification notice for series %s: %s", series_id, e)

    async def delete_series(self, ctx: AuthorizationContext, series_id: int) -> None:
        """Delete series rows, then (best effort) its topic and bucket."""
        ctx.require_gabbai(series_id, "You do not have permission to delete this series.")
        topic_arn = await self.series_repo.get_topic_arn(series_id)
        if not await self.series_repo.delete_series(series_id):
            raise ResourceNotFoundException("series", series_id)

        if topic_arn:
            try:
                await self.notifier.delete_topic(topic_arn)
            except Exception as e:
                logger.error("Series %s deleted but its topic was not: %s", series_id, e)
        bucket = series_bucket_name(self.bucket_prefix, series_id)
        try:
            await self.storage.delete_bucket(bucket)
        except Exception as e:
            logger.error("Series %s deleted but bucket %s was not: %s", series_id, bucket, e)
        logger.info("Series %s deleted by %s", series_id, ctx.username)

    async def get_details(self, series_id: int) -> SeriesDetail:
        series = await self.series_repo.get_detail(series_id)
        if series is None:
            raise ResourceNotFoundException("series", series_id)
        return series

    async def my_series(self, ctx: AuthorizationContext) -> list[MySeriesItem]:
        """Series the user moderates or attends, plus those with a pending application."""
        pending = await self.application_repo.pending_series_ids(ctx.user_id)
        member = ctx.gabbai_series_ids | ctx.participant_series_ids
        details = await self.series_repo.get_details(sorted(member | pending))
        return [
            MySeriesItem(
                series=s,
                is_gabbai=ctx.is_gabbai(s.series_id),
                is_pending=s.series_id in pending and s.series_id not in member,
            )
            for s in details
        ]
