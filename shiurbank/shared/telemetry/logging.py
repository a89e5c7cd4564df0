"""Logging configuration for the application."""

import logging
import sys

from shiurbank.core.config import get_settings
from shiurbank.shared.context import get_request_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

# boto3/botocore log every request at DEBUG; keep them at INFO even in debug mode.
_NOISY_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3")


class RequestIdLogFilter(logging.Filter):
    """Stamp record.request_id with the current request's ID ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout; each line carries the request ID.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())
    logging.basicConfig(level=log_level, format=LOG_FORMAT, handlers=[handler])
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.INFO))
