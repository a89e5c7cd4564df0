"""Tests for domain exceptions (error_code, message, details, client body)."""

from shiurbank.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleException,
    DatabaseNotConfiguredException,
    DuplicateRecordException,
    FieldValidationException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    ShiurBankException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base ShiurBankException uses class name as error_code when not provided."""
    exc = ShiurBankException("Something failed")
    assert exc.error_code == "ShiurBankException"
    assert exc.details == {}
    assert exc.to_dict() == {"success": False, "message": "Something failed"}


def test_validation_exception_field_in_details() -> None:
    exc = ValidationException("Bad date", field="recordedAt")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "recordedAt"}


def test_field_validation_exception_body_carries_errors() -> None:
    exc = FieldValidationException({"username": "Username already taken"})
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.to_dict() == {
        "success": False,
        "message": "Please correct the highlighted fields.",
        "errors": {"username": "Username already taken"},
    }


def test_details_never_reach_the_client() -> None:
    exc = AuthorizationException("No", role="gabbai", series_id=4)
    assert exc.details == {"role": "gabbai", "series_id": 4}
    assert "role" not in exc.to_dict()


def test_resource_not_found_default_message() -> None:
    exc = ResourceNotFoundException("series", 12)
    assert exc.message == "Series not found"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "series", "resource_id": 12}


def test_default_messages() -> None:
    assert AuthenticationException().message == "Not logged in."
    assert ServiceUnavailableException().message == (
        "Database is unavailable. Please try again later."
    )
    assert DatabaseNotConfiguredException().error_code == "DATABASE_NOT_CONFIGURED"


def test_duplicate_record_is_a_business_rule() -> None:
    exc = DuplicateRecordException("participant")
    assert isinstance(exc, BusinessRuleException)
    assert exc.error_code == "BUSINESS_RULE_VIOLATION"
    assert exc.message == "Participant already exists"
