"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the session identity, the authorization
context, cloud adapters and application use cases. Routes depend only on
these, not on infrastructure directly.
"""

from shiurbank.api.dependencies.auth import (
    AuthContext,
    CurrentUser,
    get_auth_context,
    get_optional_session_user,
    get_session_user,
    login_session,
    logout_session,
)
from shiurbank.api.dependencies.cloud import (
    get_database_control,
    get_notification_service,
    get_storage_service,
)
from shiurbank.api.dependencies.services import (
    get_account_service,
    get_admin_service,
    get_audio_service,
    get_catalog_service,
    get_database_control_service,
    get_participant_approval_service,
    get_participant_management_service,
    get_recording_query_service,
    get_recording_upload_service,
    get_search_service,
    get_series_service,
    get_subscription_service,
)

__all__ = [
    "AuthContext",
    "CurrentUser",
    "get_account_service",
    "get_admin_service",
    "get_audio_service",
    "get_auth_context",
    "get_catalog_service",
    "get_database_control",
    "get_database_control_service",
    "get_notification_service",
    "get_optional_session_user",
    "get_participant_approval_service",
    "get_participant_management_service",
    "get_recording_query_service",
    "get_recording_upload_service",
    "get_search_service",
    "get_series_service",
    "get_session_user",
    "get_storage_service",
    "get_subscription_service",
    "login_session",
    "logout_session",
]
