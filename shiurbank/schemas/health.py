"""Health check schemas."""

from shiurbank.schemas.base import SuccessResponse


class HealthResponse(SuccessResponse):
    status: str = "ok"


class ReadinessResponse(SuccessResponse):
    status: str = "ready"
    database: str = "ok"
