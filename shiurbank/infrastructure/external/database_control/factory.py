"""Database control factory: creates RDS or disabled backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shiurbank.application.interfaces.services import IDatabaseControl

if TYPE_CHECKING:
    from shiurbank.core.config import Settings


class DatabaseControlFactory:
    """Factory for database control instances based on configuration."""

    @staticmethod
    def create_database_control(settings: "Settings | None" = None) -> IDatabaseControl:
        """Create database control from settings.

        Raises:
            ValueError: Unknown backend.
        """
        from shiurbank.core.config import get_settings

        s = settings or get_settings()
        backend = s.database_control_backend.lower()

        if backend == "none":
            from shiurbank.infrastructure.external.database_control.disabled import (
                DisabledDatabaseControl,
            )

            return DisabledDatabaseControl()
        if backend == "rds":
            from shiurbank.infrastructure.external.aws import create_client
            from shiurbank.infrastructure.external.database_control.rds_service import (
                RdsDatabaseControl,
            )

            return RdsDatabaseControl(create_client("rds", s), s.rds_instance_id)
        raise ValueError(
            f"Unknown database control backend: {backend}. Supported: 'rds', 'none'"
        )
