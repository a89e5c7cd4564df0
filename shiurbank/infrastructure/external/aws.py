"""boto3 client construction shared by the S3, SNS and RDS adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import boto3

if TYPE_CHECKING:
    from shiurbank.core.config import Settings


def create_client(service_name: str, settings: "Settings") -> Any:
    """Create a boto3 client for service_name.

    Uses the named profile when configured (shared credentials file),
    otherwise the default credential chain (env, instance role).
    aws_endpoint_url points every client at an emulator such as LocalStack.
    """
    session = boto3.Session(
        profile_name=settings.aws_profile or None,
        region_name=settings.aws_region,
    )
    extra = {} if settings.aws_endpoint_url is None else {
        "endpoint_url": settings.aws_endpoint_url
    }
    return session.client(service_name, **extra)


def error_code(exc: Exception) -> str:
    """botocore ClientError code, or "" for other exceptions."""
    response = getattr(exc, "response", None) or {}
    return str(response.get("Error", {}).get("Code", ""))
