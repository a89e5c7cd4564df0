"""Domain exceptions for the ShiurBank application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. The
presentation layer maps them to HTTP responses in exception handlers; the
message is always human readable because clients display it directly.
"""

from typing import Any


class ShiurBankException(Exception):
    """Base exception for all ShiurBank application errors.

    Attributes:
        message: Human-readable error description (returned to the client).
        error_code: Machine-readable error code (used for status mapping).
        details: Additional context; logged, never returned to the client.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body sent to the client."""
        return {"success": False, "message": self.message}


class ValidationException(ShiurBankException):
    """Raised when input validation fails (missing or malformed value)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class FieldValidationException(ValidationException):
    """Raised when one or more form fields are invalid; carries a field -> message map."""

    def __init__(
        self,
        errors: dict[str, str],
        message: str = "Please correct the highlighted fields.",
    ) -> None:
        super().__init__(message)
        self.errors = dict(errors)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class BusinessRuleException(ShiurBankException):
    """Raised when a request is well-formed but violates a business rule.

    Examples: applying twice to the same series, adding an existing gabbai.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "BUSINESS_RULE_VIOLATION", details)


class AuthenticationException(ShiurBankException):
    """Raised when no user is logged in or credentials are invalid."""

    def __init__(self, message: str = "Not logged in.") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(ShiurBankException):
    """Raised when the logged-in user lacks the role an action requires."""

    def __init__(
        self,
        message: str = "You do not have permission to perform this action.",
        role: str | None = None,
        series_id: int | None = None,
    ) -> None:
        """Initialize with the missing role and the series it applies to.

        Args:
            message: User-facing description.
            role: Required role, e.g. "admin" or "gabbai".
            series_id: Series the role was checked against, if any.
        """
        details: dict[str, Any] = {}
        if role:
            details["role"] = role
        if series_id is not None:
            details["series_id"] = series_id
        super().__init__(message, "AUTHORIZATION_ERROR", details)


class ResourceNotFoundException(ShiurBankException):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: int | str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and identifier.

        Args:
            resource_type: Type of resource (e.g. "series", "user").
            resource_id: Identifier that was looked up.
            message: Optional user-facing message; defaults to "<Type> not found".
        """
        super().__init__(
            message or f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ServiceUnavailableException(ShiurBankException):
    """Raised when a backing service (usually the database) cannot be reached."""

    def __init__(
        self, message: str = "Database is unavailable. Please try again later."
    ) -> None:
        super().__init__(message, "SERVICE_UNAVAILABLE")


class DatabaseNotConfiguredException(ServiceUnavailableException):
    """Raised when DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__("Database is not configured.")
        self.error_code = "DATABASE_NOT_CONFIGURED"


class DuplicateRecordException(BusinessRuleException):
    """Raised by persistence when a unique constraint rejects an insert.

    Callers usually catch it and re-raise with a workflow-specific message.
    """

    def __init__(self, resource_type: str, message: str | None = None) -> None:
        super().__init__(
            message or f"{resource_type.capitalize()} already exists",
            {"resource_type": resource_type},
        )
