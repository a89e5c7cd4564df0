"""Request ID middleware.

Forwards a well-formed client X-Request-ID or mints a new one, binds it to
the request context for log records, and echoes it on the response.
Raw ASGI so audio streams pass through without buffering.
"""

import re
import uuid
from typing import Callable

from shiurbank.shared.context import reset_request_id, set_request_id

REQUEST_ID_MAX_LENGTH = 64
# Only these characters reach log lines and response headers.
_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]+")


def get_header(scope: dict, name: str) -> str | None:
    """First value of header name in an ASGI scope (case-insensitive)."""
    want = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == want:
            return value.decode("utf-8", errors="replace")
    return None


def _sanitize_request_id(raw: str | None) -> str:
    """Client value cut to REQUEST_ID_MAX_LENGTH, or a fresh UUID if it has unsafe characters."""
    candidate = (raw or "").strip()[:REQUEST_ID_MAX_LENGTH]
    if _SAFE_REQUEST_ID.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app so each HTTP request gets a request ID in scope state, logs and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = _sanitize_request_id(get_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        response_header = (header_name.lower().encode(), request_id.encode())

        async def send_with_request_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [*message.get("headers", []), response_header]
            await send(message)

        token = set_request_id(request_id)
        try:
            await app(scope, receive, send_with_request_id)
        finally:
            reset_request_id(token)

    return asgi_app
