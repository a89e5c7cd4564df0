"""ASGI middleware: request ID and request body size limit."""

from shiurbank.middleware.request_id import RequestIDMiddleware
from shiurbank.middleware.request_size_limit import (
    FORM_OVERHEAD_BYTES,
    RequestSizeLimitMiddleware,
)

__all__ = ["FORM_OVERHEAD_BYTES", "RequestIDMiddleware", "RequestSizeLimitMiddleware"]
