"""User repository: registration, authentication and user listings. Returns application DTOs."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiurbank.application.dtos.user import AccountCreate, UserResult
from shiurbank.domain.exceptions import (
    FieldValidationException,
    ServiceUnavailableException,
)
from shiurbank.infrastructure.persistence.models.user import (
    Institution,
    User,
    UserInstitution,
)
from shiurbank.infrastructure.persistence.repositories.base import BaseRepository
from shiurbank.infrastructure.security.password import get_password_hash, verify_password

logger = logging.getLogger(__name__)

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        user_id=u.user_id,
        username=u.username,
        title=u.title,
        first_name=u.fname,
        last_name=u.lname,
        email=u.email,
    )


class UserRepository(BaseRepository[User]):
    """Users: create_user, authenticate, lookups by id/username/email."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_result(self, user_id: int) -> UserResult | None:
        user = await self.get_by_id(user_id)
        return user_to_result(user) if user else None

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def username_exists(self, username: str) -> bool:
        result = await self.db.execute(
            select(User.user_id).where(User.username == username)
        )
        return result.first() is not None

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(
            select(User.user_id).where(func.lower(User.email) == email.lower())
        )
        return result.first() is not None

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        """Return the user when username/password match, else None.

        Always runs one bcrypt comparison so response time does not reveal
        whether the username exists.

        Raises:
            ServiceUnavailableException: the database cannot be reached.
        """
        try:
            user = await self.get_by_username(username)
        except (DBAPIError, OSError) as e:
            logger.error("Login lookup failed, database unreachable: %s", e)
            raise ServiceUnavailableException() from e
        if user is None:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            return None
        ok = await asyncio.to_thread(verify_password, password, user.hashed_pwd)
        return user_to_result(user) if ok else None

    async def create_user(self, data: AccountCreate) -> UserResult:
        """Insert a user and link the chosen institutions.

        Raises:
            FieldValidationException: username/email taken (including a lost race
                on the unique constraints) or an unknown institution id.
        """
        hashed = await asyncio.to_thread(get_password_hash, data.password)
        user = User(
            username=data.username,
            hashed_pwd=hashed,
            title=data.title or None,
            fname=data.first_name,
            lname=data.last_name,
            email=data.email,
        )
        try:
            user = await self.create(user)
        except IntegrityError as e:
            raise FieldValidationException(
                {"username": "Username already taken"}
            ) from e
        await self.add_institutions(user.user_id, data.institution_ids)
        return user_to_result(user)

    async def add_institutions(self, user_id: int, institution_ids: list[int]) -> None:
        wanted = sorted(set(institution_ids))
        if not wanted:
            return
        result = await self.db.execute(
            select(Institution.inst_id).where(Institution.inst_id.in_(wanted))
        )
        known = set(result.scalars().all())
        missing = [i for i in wanted if i not in known]
        if missing:
            raise FieldValidationException(
                {"institutions": f"Unknown institution: {missing[0]}"}
            )
        self.db.add_all(UserInstitution(user_id=user_id, inst_id=i) for i in wanted)
        await self.db.flush()

    async def list_users(self) -> list[UserResult]:
        result = await self.db.execute(select(User).order_by(User.lname, User.fname))
        return [user_to_result(u) for u in result.scalars().all()]

    async def get_many(self, user_ids: list[int]) -> list[UserResult]:
        if not user_ids:
            return []
        result = await self.db.execute(
            select(User).where(User.user_id.in_(user_ids)).order_by(User.lname, User.fname)
        )
        return [user_to_result(u) for u in result.scalars().all()]
