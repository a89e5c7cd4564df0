"""Auth API schemas."""

from pydantic import Field

from shiurbank.application.dtos.user import InstitutionResult
from shiurbank.schemas.base import CamelModel, SuccessResponse


class LoginRequest(CamelModel):
    """Blank values are reported by the login use case, not by validation."""

    username: str | None = None
    password: str | None = None


class CreateAccountRequest(CamelModel):
    username: str | None = None
    password: str | None = None
    title: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    institutions: list[int] = Field(default_factory=list)


class LoginResponse(SuccessResponse):
    username: str


class CurrentUserResponse(SuccessResponse):
    logged_in: bool
    username: str | None = None


class InstitutionItem(CamelModel):
    inst_id: int
    name: str

    @classmethod
    def from_result(cls, inst: InstitutionResult) -> "InstitutionItem":
        return cls(inst_id=inst.inst_id, name=inst.name)


class InstitutionListResponse(SuccessResponse):
    institutions: list[InstitutionItem]
