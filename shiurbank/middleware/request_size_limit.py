"""Request body size limit middleware.

Rejects requests whose body exceeds the configured maximum (the upload limit
plus room for the multipart form fields). Enforces the limit for both
Content-Length and chunked bodies without buffering: the chunked case counts
bytes as the app reads them.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

import json
from typing import Callable

from shiurbank.middleware.request_id import get_header

# Room for the form fields and multipart boundaries around an upload
FORM_OVERHEAD_BYTES = 1024 * 1024


class PayloadTooLarge(Exception):
    """Raised into the app when a chunked body passes the limit mid-stream."""


async def _send_413(send: Callable, max_bytes: int) -> None:
    body = json.dumps(
        {"success": False, "message": f"Request body must be at most {max_bytes} bytes"}
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (Content-Length or chunked). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length is not None:
            try:
                too_large = int(content_length) > max_bytes
            except ValueError:
                too_large = False
            if too_large:
                await _send_413(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        received = 0
        response_started = False

        async def counting_receive() -> dict:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    raise PayloadTooLarge()
            return message

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await app(scope, counting_receive, tracking_send)
        except PayloadTooLarge:
            if not response_started:
                await _send_413(send, max_bytes)

    return asgi_app
