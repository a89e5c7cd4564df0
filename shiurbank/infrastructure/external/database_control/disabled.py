"""Database control backend for deployments without a managed instance."""

from shiurbank.infrastructure.exceptions import DatabaseControlError
from shiurbank.core.constants import DB_STATUS_NOT_FOUND


class DisabledDatabaseControl:
    """Reports "not-found" and refuses start/stop."""

    instance_id = "none"

    async def get_status(self) -> str:
        return DB_STATUS_NOT_FOUND

    async def start(self) -> None:
        raise DatabaseControlError("start", self.instance_id, "database control disabled")

    async def stop(self) -> None:
        raise DatabaseControlError("stop", self.instance_id, "database control disabled")
