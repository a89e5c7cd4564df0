"""Managed database lifecycle control (RDS start/stop/status).

Implementations satisfy shiurbank.application.interfaces.services.IDatabaseControl.
"""

from shiurbank.infrastructure.external.database_control.factory import (
    DatabaseControlFactory,
)

__all__ = ["DatabaseControlFactory"]
