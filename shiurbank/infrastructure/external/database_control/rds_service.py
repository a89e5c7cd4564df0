"""AWS RDS instance control (status, start, stop)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from shiurbank.infrastructure.exceptions import DatabaseControlError
from shiurbank.infrastructure.external.aws import error_code
from shiurbank.core.constants import (
    DB_STATUS_ERROR,
    DB_STATUS_NOT_FOUND,
)

logger = logging.getLogger(__name__)


class RdsDatabaseControl:
    """Controls one RDS instance. boto3 calls run via asyncio.to_thread."""

    def __init__(self, client: Any, instance_id: str) -> None:
        self._client = client
        self.instance_id = instance_id

    async def get_status(self) -> str:
        try:
            response = await asyncio.to_thread(
                self._client.describe_db_instances,
                DBInstanceIdentifier=self.instance_id,
            )
        except Exception as e:
            if error_code(e) == "DBInstanceNotFound":
                return DB_STATUS_NOT_FOUND
            logger.error("Error getting database status: %s", e)
            return DB_STATUS_ERROR
        instances = response.get("DBInstances") or []
        if not instances:
            return DB_STATUS_NOT_FOUND
        return instances[0]["DBInstanceStatus"]

    async def start(self) -> None:
        try:
            await asyncio.to_thread(
                self._client.start_db_instance, DBInstanceIdentifier=self.instance_id
            )
        except Exception as e:
            raise DatabaseControlError("start", self.instance_id, str(e)) from e
        logger.info("Start requested for database instance %s", self.instance_id)

    async def stop(self) -> None:
        try:
            await asyncio.to_thread(
                self._client.stop_db_instance, DBInstanceIdentifier=self.instance_id
            )
        except Exception as e:
            raise DatabaseControlError("stop", self.instance_id, str(e)) from e
        logger.info("Stop requested for database instance %s", self.instance_id)
