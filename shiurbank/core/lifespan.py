"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (cloud adapters, telemetry, DB
engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from shiurbank.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: telemetry (if enabled), cloud adapters, shared notification
    topics (best effort). Shutdown order: telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    from shiurbank.infrastructure.persistence import database

    if settings.telemetry_enabled:
        from shiurbank.shared.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_logging()
        database._ensure_engine()
        if database.engine is not None:
            telemetry.instrument_sqlalchemy(database.engine)
        logger.info("Telemetry initialized")

    from shiurbank.infrastructure.external.database_control import DatabaseControlFactory
    from shiurbank.infrastructure.external.notifications import NotificationFactory
    from shiurbank.infrastructure.external.storage import StorageFactory

    app.state.storage = StorageFactory.create_storage_service(settings)
    app.state.notifier = NotificationFactory.create_notification_service(settings)
    app.state.database_control = DatabaseControlFactory.create_database_control(settings)
    try:
        await app.state.notifier.initialize()
    except Exception as e:
        logger.error("Notification topics not initialized; admin notices may fail: %s", e)

    yield

    # ---- Shutdown ----
    from shiurbank.shared.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    if database.engine is not None:
        await database.engine.dispose()
        logger.info("Database engine disposed")
