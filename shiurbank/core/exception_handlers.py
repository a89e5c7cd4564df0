"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Every body is {"success": false, "message": ...}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shiurbank.core.config import get_settings
from shiurbank.domain.exceptions import ShiurBankException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

# Map domain error_code to HTTP status; unlisted codes (cloud failures) are 500
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "BUSINESS_RULE_VIOLATION": 400,
    "AUTHENTICATION_ERROR": 401,
    "AUTHORIZATION_ERROR": 403,
    "RESOURCE_NOT_FOUND": 404,
    "SERVICE_UNAVAILABLE": 503,
    "DATABASE_NOT_CONFIGURED": 503,
}


def _shiurbank_exception_handler(
    request: Request, exc: ShiurBankException
) -> JSONResponse:
    """Return JSON from ShiurBankException.to_dict() with the mapped status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 500)
    content = exc.to_dict()
    if status >= 500:
        logger.error(
            "%s on %s %s: %s %s",
            exc.error_code,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
        )
    if status == 500:
        content["message"] = GENERIC_ERROR_MESSAGE
    return JSONResponse(status_code=status, content=content)


def _field_name(loc: tuple[Any, ...]) -> str:
    """Last location element that names a field ("body", "query" and list indexes skipped)."""
    for part in reversed(loc):
        if isinstance(part, str) and part not in ("body", "query", "path", "form"):
            return part
    return "request"


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with errors{field: message}."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error.get("loc", ()))), error.get("msg", "Invalid"))
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request.", "errors": errors},
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (unknown route, wrong method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else GENERIC_ERROR_MESSAGE
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: ShiurBankException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(ShiurBankException, _shiurbank_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
