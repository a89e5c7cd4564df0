"""Create a user (or reuse an existing one) and add them to the admin roster.

Usage:
    uv run python -m scripts.create_admin <username> <email> [password]
If the username does not exist and password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys

from dotenv import load_dotenv

from shiurbank.application.dtos.user import AccountCreate
from shiurbank.core.config import get_settings
from shiurbank.infrastructure.persistence import database
from shiurbank.infrastructure.persistence.repositories import (
    AdminRepository,
    UserRepository,
)


async def main() -> None:
    """Create or look up the user, then grant admin."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.create_admin <username> <email> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    username = sys.argv[1]
    email = sys.argv[2]
    password = sys.argv[3] if len(sys.argv) > 3 else None

    load_dotenv()
    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("DATABASE_URL not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            user_repo = UserRepository(session)
            admin_repo = AdminRepository(session)
            existing = await user_repo.get_by_username(username)
            if existing is not None:
                user_id = existing.user_id
                print(f"Using existing user: {user_id} ({username})")
            else:
                if not password:
                    password = secrets.token_urlsafe(12)
                    print(f"Password: {password}")
                user = await user_repo.create_user(
                    AccountCreate(
                        username=username,
                        password=password,
                        title="",
                        first_name=username,
                        last_name="Admin",
                        email=email,
                    )
                )
                user_id = user.user_id
                print(f"Created user: {user_id} ({username})")
            if await admin_repo.is_admin(user_id):
                print("User is already an admin")
                return
            await admin_repo.add_admin(user_id)
            print(f"Granted admin to user {user_id}")


if __name__ == "__main__":
    asyncio.run(main())
