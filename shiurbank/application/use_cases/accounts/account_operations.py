"""Account operations: login and registration."""

from __future__ import annotations

import logging

from pydantic import validate_email
from pydantic_core import PydanticCustomError

from shiurbank.application.dtos.user import AccountCreate, UserResult
from shiurbank.application.interfaces.repositories import IUserRepository
from shiurbank.domain.exceptions import (
    AuthenticationException,
    FieldValidationException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Login (credential check) and account creation with per-field errors."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def login(self, username: str | None, password: str | None) -> UserResult:
        """Return the authenticated user.

        Raises:
            ValidationException: blank username or password.
            AuthenticationException: no such user or wrong password.
            ServiceUnavailableException: database unreachable.
        """
        username = (username or "").strip()
        if not username or not (password or "").strip():
            raise ValidationException("Username and password are required.")
        user = await self.user_repo.authenticate(username, password or "")
        if user is None:
            logger.info("Failed login for %s", username)
            raise AuthenticationException("Invalid username or password")
        logger.info("User %s logged in", user.username)
        return user

    async def create_account(
        self,
        username: str | None,
        password: str | None,
        title: str | None,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        institution_ids: list[int] | None = None,
    ) -> UserResult:
        """Validate every field, then create the user and link institutions.

        Raises:
            FieldValidationException: errors keyed by the wire field name.
        """
        username = (username or "").strip()
        title = (title or "").strip()
        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        email = (email or "").strip()
        errors: dict[str, str] = {}

        if not username:
            errors["username"] = "Username is required"
        elif await self.user_repo.username_exists(username):
            errors["username"] = "Username already taken"
        if not (password or "").strip():
            errors["password"] = "Password is required"
        if not title:
            errors["title"] = "Title is required"
        if not first_name:
            errors["firstName"] = "First name is required"
        if not last_name:
            errors["lastName"] = "Last name is required"
        if not email:
            errors["email"] = "Email is required"
        else:
            try:
                _, email = validate_email(email)
            except PydanticCustomError:
                errors["email"] = "Please enter a valid email address"
            else:
                if await self.user_repo.email_exists(email):
                    errors["email"] = "Email already taken"
        if errors:
            raise FieldValidationException(errors)

        user = await self.user_repo.create_user(
            AccountCreate(
                username=username,
                password=password or "",
                title=title,
                first_name=first_name,
                last_name=last_name,
                email=email,
                institution_ids=list(institution_ids or []),
            )
        )
        logger.info("Created account %s (user_id=%s)", user.username, user.user_id)
        return user
