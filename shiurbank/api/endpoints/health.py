"""Health check endpoints: liveness (no dependencies) and database readiness."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.domain.exceptions import ServiceUnavailableException
from shiurbank.infrastructure.persistence.database import get_db
from shiurbank.schemas.health import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadinessResponse:
    """503 unless the database answers a trivial query."""
    try:
        await db.execute(text("SELECT 1"))
    except (DBAPIError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        raise ServiceUnavailableException() from e
    return ReadinessResponse()
