"""Request-scoped values held in contextvars.

The request ID is set by RequestIDMiddleware for the lifetime of one request
and read by the logging filter, so every log line of that request carries it.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for the current task; pass the token to reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)
