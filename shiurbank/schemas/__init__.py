"""API request/response schemas (pydantic, camelCase on the wire)."""

from shiurbank.schemas.base import (
    CamelModel,
    MessageResponse,
    SuccessResponse,
    UserIdRequest,
)

__all__ = ["CamelModel", "MessageResponse", "SuccessResponse", "UserIdRequest"]
