"""Settings: properties file source, priority order and backend validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from shiurbank.core.config import Settings, read_properties

PROPERTIES = """\
# legacy deployment file
db_connection=postgresql+asyncpg://shiur:pw@db:5432/shiurbank
s3.region = eu-west-1
s3.bucket.name: legacy-audio
admin.password=FromProperties1
unknown.key=ignored
"""


@pytest.fixture
def properties_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "dbcredentials.properties"
    path.write_text(PROPERTIES, encoding="utf-8")
    monkeypatch.setenv("PROPERTIES_FILE", str(path))
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("SHIURBANK_ADMIN_PASSWORD", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    return path


def test_read_properties(properties_file: Path) -> None:
    values = read_properties(properties_file)
    assert values["s3.region"] == "eu-west-1"
    assert values["s3.bucket.name"] == "legacy-audio"
    assert "# legacy deployment file" not in values


def test_properties_file_fills_settings(properties_file: Path) -> None:
    settings = Settings(_env_file=None)
    assert settings.database_url == "postgresql+asyncpg://shiur:pw@db:5432/shiurbank"
    assert settings.aws_region == "eu-west-1"
    assert settings.s3_default_bucket == "legacy-audio"
    assert settings.shiurbank_admin_password.get_secret_value() == "FromProperties1"


def test_environment_wins_over_properties(
    properties_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    assert Settings(_env_file=None).aws_region == "us-west-2"


def test_missing_properties_file_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROPERTIES_FILE", "/nonexistent/dbcredentials.properties")
    monkeypatch.delenv("SHIURBANK_ADMIN_PASSWORD", raising=False)
    settings = Settings(_env_file=None)
    assert settings.shiurbank_admin_password.get_secret_value() == "ShiurBank2024!"
    assert settings.max_upload_size == 1024 * 1024 * 1024


def test_unknown_storage_backend_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "gcs")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_session_secret_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SESSION_SECRET_KEY", "")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_comma_separated_lists(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("SNS_ADMIN_EMAILS", "x@example.com,,y@example.com ")
    settings = Settings(_env_file=None)
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.admin_emails == ["x@example.com", "y@example.com"]
