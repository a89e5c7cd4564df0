"""DTOs for user and account use cases (no dependency on ORM)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SessionUser:
    """The identity stored in the session cookie."""

    user_id: int
    username: str


@dataclass(frozen=True)
class UserResult:
    """User read-model. No password."""

    user_id: int
    username: str
    title: str | None
    first_name: str
    last_name: str
    email: str | None

    @property
    def display_name(self) -> str:
        parts = [self.title, self.first_name, self.last_name]
        return " ".join(p for p in parts if p)


@dataclass(frozen=True)
class AccountCreate:
    """Registration form after trimming."""

    username: str
    password: str
    title: str
    first_name: str
    last_name: str
    email: str
    institution_ids: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class InstitutionResult:
    inst_id: int
    name: str


@dataclass(frozen=True)
class AdminUserItem:
    """Row of the admin user list."""

    user: UserResult
    is_admin: bool
