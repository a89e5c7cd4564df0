"""Pytest configuration and fixtures for shiurbank.

Environment is fixed before shiurbank is imported so settings never read a
developer .env or properties file. API tests run against an in-memory SQLite
database (aiosqlite) and fake cloud adapters injected through
app.dependency_overrides.
"""

import os

os.environ["SESSION_SECRET_KEY"] = "test-session-secret"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["NOTIFICATIONS_BACKEND"] = "log"
os.environ["DATABASE_CONTROL_BACKEND"] = "none"
os.environ["SHIURBANK_ADMIN_PASSWORD"] = "test-admin-password"
os.environ["PROPERTIES_FILE"] = "/nonexistent/dbcredentials.properties"

from collections.abc import AsyncIterator
from datetime import datetime
from typing import BinaryIO

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shiurbank.api.dependencies import (
    get_database_control,
    get_notification_service,
    get_storage_service,
)
from shiurbank.application.dtos.recording import AudioObject
from shiurbank.core.config import get_settings
from shiurbank.infrastructure.exceptions import StorageNotFoundError
from shiurbank.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
)
from shiurbank.infrastructure.persistence.models import (
    Admin,
    Gabbai,
    Institution,
    Rebbi,
    ShiurParticipant,
    ShiurRecording,
    ShiurSeries,
    SubscriberType,
    Topic,
    User,
)
from shiurbank.infrastructure.security.password import get_password_hash

get_settings.cache_clear()

from shiurbank.main import app  # noqa: E402

TEST_PASSWORD = "password123"

# bcrypt is slow; hash the shared test password once
_TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


class FakeStorage:
    """In-memory IStorageService: bucket -> key -> bytes."""

    def __init__(self) -> None:
        self.buckets: dict[str, dict[str, bytes]] = {}
        self.uploads: list[tuple[str, str, str]] = []

    async def create_bucket(self, bucket: str) -> None:
        self.buckets.setdefault(bucket, {})

    async def delete_bucket(self, bucket: str) -> None:
        self.buckets.pop(bucket, None)

    async def upload_audio(
        self, bucket: str, key: str, file_data: BinaryIO, content_type: str
    ) -> None:
        self.buckets.setdefault(bucket, {})[key] = file_data.read()
        self.uploads.append((bucket, key, content_type))

    async def open_audio(self, bucket: str, key: str) -> AudioObject:
        data = self.buckets.get(bucket, {}).get(key)
        if data is None:
            raise StorageNotFoundError(bucket, key)

        async def chunks() -> AsyncIterator[bytes]:
            yield data

        return AudioObject(
            key=key, content_type="audio/mpeg", content_length=len(data), chunks=chunks()
        )

    async def list_audio(self, bucket: str) -> list[str]:
        return sorted(self.buckets.get(bucket, {}))


class FakeNotifier:
    """INotificationService that records every call."""

    def __init__(self) -> None:
        self.admin_notices: list[tuple[str, str]] = []
        self.published: list[tuple[str, str, str]] = []
        self.topics: list[str] = []
        self.subscriptions: list[tuple[str, str]] = []
        self.unsubscribed: list[str] = []
        self.confirmed_arn: str | None = None

    async def initialize(self) -> None:
        return None

    async def notify_admins(self, subject: str, message: str) -> None:
        self.admin_notices.append((subject, message))

    async def publish(self, topic_arn: str, subject: str, message: str) -> None:
        self.published.append((topic_arn, subject, message))

    async def create_topic(self, name: str) -> str:
        self.topics.append(name)
        return f"arn:aws:sns:us-east-1:000000000000:{name}"

    async def delete_topic(self, topic_arn: str) -> None:
        return None

    async def subscribe_email(self, topic_arn: str, email: str) -> str:
        self.subscriptions.append((topic_arn, email))
        return "pending confirmation"

    async def unsubscribe(self, subscription_arn: str) -> None:
        self.unsubscribed.append(subscription_arn)

    async def find_subscription_arn_by_email(self, topic_arn: str, email: str) -> str | None:
        return self.confirmed_arn


class FakeDatabaseControl:
    def __init__(self) -> None:
        self.status = "available"
        self.calls: list[str] = []

    async def get_status(self) -> str:
        return self.status

    async def start(self) -> None:
        self.calls.append("start")

    async def stop(self) -> None:
        self.calls.append("stop")


@pytest.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Fresh in-memory schema per test (one shared connection via StaticPool)."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def db_control() -> FakeDatabaseControl:
    return FakeDatabaseControl()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    storage: FakeStorage,
    notifier: FakeNotifier,
    db_control: FakeDatabaseControl,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app with the test database and fake adapters."""

    async def _db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_db_transactional] = _db_transactional
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_database_control] = lambda: db_control
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def catalog(session_factory: async_sessionmaker[AsyncSession]) -> dict[str, int]:
    """One institution, topic, rebbi and the two subscriber types."""
    async with session_factory() as session:
        async with session.begin():
            inst = Institution(name="Yeshiva University")
            topic = Topic(name="Halacha")
            rebbi = Rebbi(title="Rabbi", fname="Moshe", lname="Cohen")
            session.add_all(
                [inst, topic, rebbi, SubscriberType(name="Email"), SubscriberType(name="SMS")]
            )
            await session.flush()
            return {
                "inst_id": inst.inst_id,
                "topic_id": topic.topic_id,
                "rebbi_id": rebbi.rebbi_id,
            }


async def create_user(
    session_factory: async_sessionmaker[AsyncSession],
    username: str,
    *,
    email: str | None = None,
    admin: bool = False,
) -> int:
    async with session_factory() as session:
        async with session.begin():
            user = User(
                username=username,
                hashed_pwd=_TEST_PASSWORD_HASH,
                fname=username.capitalize(),
                lname="Test",
                email=email or f"{username}@example.com",
            )
            session.add(user)
            await session.flush()
            if admin:
                session.add(Admin(user_id=user.user_id))
            return user.user_id


async def create_series(
    session_factory: async_sessionmaker[AsyncSession],
    catalog: dict[str, int],
    *,
    gabbai_id: int,
    description: str = "Weekly halacha shiur",
    requires_permission: bool = False,
    topic_arn: str | None = None,
) -> int:
    """Insert a series with gabbai_id as gabbai and participant (no cloud calls)."""
    async with session_factory() as session:
        async with session.begin():
            series = ShiurSeries(
                rebbi_id=catalog["rebbi_id"],
                topic_id=catalog["topic_id"],
                inst_id=catalog["inst_id"],
                description=description,
                requires_permission=requires_permission,
                sns_topic_arn=topic_arn,
            )
            session.add(series)
            await session.flush()
            session.add(Gabbai(user_id=gabbai_id, series_id=series.series_id))
            session.add(ShiurParticipant(user_id=gabbai_id, series_id=series.series_id))
            return series.series_id


async def create_recording(
    session_factory: async_sessionmaker[AsyncSession],
    series_id: int,
    title: str,
    *,
    recorded_at: datetime = datetime(2024, 3, 1, 19, 30),
    description: str | None = None,
    s3_file_path: str = "recordings/shiur.mp3",
) -> int:
    async with session_factory() as session:
        async with session.begin():
            recording = ShiurRecording(
                series_id=series_id,
                s3_file_path=s3_file_path,
                title=title,
                recorded_at=recorded_at,
                keyword_1="k1",
                keyword_2="k2",
                keyword_3="k3",
                keyword_4="k4",
                keyword_5="k5",
                keyword_6="k6",
                description=description,
            )
            session.add(recording)
            await session.flush()
            return recording.recording_id


async def login(client: AsyncClient, username: str, password: str = TEST_PASSWORD) -> None:
    response = await client.post(
        "/api/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
