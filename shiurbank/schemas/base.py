"""Base schema: snake_case in Python, camelCase on the wire."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialized and parsed with camelCase keys; Python code uses field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    """Every JSON body carries success."""

    success: bool = True


class MessageResponse(SuccessResponse):
    message: str


class UserIdRequest(CamelModel):
    """Body of the roster and admin actions that name a target user."""

    user_id: int | None = None
