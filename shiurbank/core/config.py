"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings with
.env support plus the legacy ``dbcredentials.properties`` file used by
existing deployments (database DSN, AWS profile/region, bucket and topic
naming, emergency admin password). Environment variables win over the
properties file; the properties file wins over field defaults.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_PROPERTIES_FILE = "dbcredentials.properties"

# Properties-file key -> Settings field name.
PROPERTY_KEYS: dict[str, str] = {
    "db_connection": "database_url",
    "s3.region": "aws_region",
    "s3.aws.profile": "aws_profile",
    "s3.bucket.name": "s3_default_bucket",
    "sns.admin.topic.name": "sns_admin_topic_name",
    "sns.admin.topic.arn": "sns_admin_topic_arn",
    "sns.subscriber.topic.name": "sns_subscriber_topic_name",
    "sns.admin.emails": "sns_admin_emails",
    "rds.instance.id": "rds_instance_id",
    "admin.password": "shiurbank_admin_password",
}


def read_properties(path: Path) -> dict[str, str]:
    """Parse a Java-style ``key=value`` properties file.

    Blank lines and lines starting with ``#`` or ``!`` are skipped. The first
    ``=`` or ``:`` separates key from value; both sides are stripped.
    """
    values: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line[0] in "#!":
            continue
        positions = [p for p in (line.find("="), line.find(":")) if p != -1]
        if not positions:
            values[line] = ""
            continue
        sep = min(positions)
        values[line[:sep].strip()] = line[sep + 1 :].strip()
    return values


class PropertiesFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the legacy properties file (missing file = no values)."""

    def __init__(self, settings_cls: type[BaseSettings], path: str | None) -> None:
        super().__init__(settings_cls)
        self.path = Path(path) if path else None

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        if self.path is None or not self.path.is_file():
            return {}
        raw = read_properties(self.path)
        return {
            PROPERTY_KEYS[key]: value
            for key, value in raw.items()
            if key in PROPERTY_KEYS and value
        }


class Settings(BaseSettings):
    """Application settings loaded from environment, .env and the properties file.

    session_secret_key is required; cloud backends are validated in
    validate_required_and_backends.
    """

    # App
    app_name: str = "shiurbank"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (any SQLAlchemy async URL, e.g. postgresql+asyncpg://... or mysql+aiomysql://...)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Session cookie
    session_secret_key: SecretStr = SecretStr("")
    session_cookie_name: str = "shiurbank_session"
    session_max_age_seconds: int = 14 * 24 * 60 * 60
    session_https_only: bool = False

    # CORS
    allowed_origins: str = "http://localhost:8080"

    # AWS (shared by S3, SNS and RDS clients)
    aws_region: str = "us-east-1"
    aws_profile: str | None = None
    aws_endpoint_url: str | None = None

    # Object storage: "s3" or "local"
    storage_backend: str = "s3"
    storage_root: str = "/var/shiurbank/storage"
    s3_bucket_prefix: str = "shiurbank-series"
    s3_default_bucket: str = "shiurbank-audio"
    max_upload_size: int = 1024 * 1024 * 1024  # 1GB

    # Notifications: "sns" or "log"
    notifications_backend: str = "sns"
    sns_admin_topic_name: str = "shiurbank-admin-notifications"
    sns_admin_topic_arn: str | None = None
    sns_subscriber_topic_name: str = "shiurbank-subscriber-notifications"
    sns_series_topic_prefix: str = "shiurbank-series"
    sns_admin_emails: str = ""

    # Managed database control: "rds" or "none"
    database_control_backend: str = "rds"
    rds_instance_id: str = "shiurbank-db"

    # Emergency admin password for the public RDS start/stop routes
    shiurbank_admin_password: SecretStr = SecretStr("ShiurBank2024!")

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Telemetry (OpenTelemetry)
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        properties_file = os.environ.get("PROPERTIES_FILE", DEFAULT_PROPERTIES_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PropertiesFileSettingsSource(settings_cls, properties_file),
            file_secret_settings,
        )

    @model_validator(mode="after")
    def validate_required_and_backends(self) -> "Settings":
        if not self.session_secret_key.get_secret_value():
            raise ValueError("SESSION_SECRET_KEY is required")
        if self.storage_backend.lower() not in ("s3", "local"):
            raise ValueError("STORAGE_BACKEND must be 's3' or 'local'")
        if self.notifications_backend.lower() not in ("sns", "log"):
            raise ValueError("NOTIFICATIONS_BACKEND must be 'sns' or 'log'")
        if self.database_control_backend.lower() not in ("rds", "none"):
            raise ValueError("DATABASE_CONTROL_BACKEND must be 'rds' or 'none'")
        return self

    @property
    def admin_emails(self) -> list[str]:
        """Admin e-mail addresses subscribed to the admin topic at startup."""
        return [e.strip() for e in self.sns_admin_emails.split(",") if e.strip()]

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings (tests call get_settings.cache_clear() after changing env)."""
    return Settings()
