"""Request ID context: middleware binding and the logging filter."""

import logging

from shiurbank.middleware.request_id import RequestIDMiddleware
from shiurbank.shared.context import get_request_id, reset_request_id, set_request_id
from shiurbank.shared.telemetry.logging import RequestIdLogFilter


def _record() -> logging.LogRecord:
    return logging.LogRecord("shiurbank.test", logging.INFO, __file__, 1, "msg", None, None)


def test_log_filter_uses_current_request_id() -> None:
    record = _record()
    token = set_request_id("req-42")
    try:
        assert RequestIdLogFilter().filter(record) is True
    finally:
        reset_request_id(token)
    assert record.request_id == "req-42"


def test_log_filter_outside_request() -> None:
    record = _record()
    RequestIdLogFilter().filter(record)
    assert record.request_id == "-"


async def test_middleware_binds_request_id_for_the_request_only() -> None:
    seen: list[str | None] = []
    sent: list[dict] = []

    async def inner(scope, receive, send) -> None:
        seen.append(get_request_id())
        await send({"type": "http.response.start", "status": 200, "headers": []})

    async def send(message: dict) -> None:
        sent.append(message)

    scope = {"type": "http", "headers": [(b"x-request-id", b"shiur-upload-7")]}
    await RequestIDMiddleware(inner)(scope, None, send)

    assert seen == ["shiur-upload-7"]
    assert scope["state"]["request_id"] == "shiur-upload-7"
    assert (b"x-request-id", b"shiur-upload-7") in sent[0]["headers"]
    assert get_request_id() is None
