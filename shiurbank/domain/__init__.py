"""Domain layer: search entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from shiurbank.domain.entities import ParsedQuery, RecordingHit, SearchHit, SeriesHit
from shiurbank.domain.enums import (
    MembershipState,
    RecordingSort,
    SearchResultType,
    SubscriptionState,
)
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

__all__ = [
    # Entities
    "ParsedQuery",
    "RecordingHit",
    "SearchHit",
    "SeriesHit",
    # Enums
    "MembershipState",
    "RecordingSort",
    "SearchResultType",
    "SubscriptionState",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "BusinessRuleException",
    "DatabaseNotConfiguredException",
    "DuplicateRecordException",
    "FieldValidationException",
    "ResourceNotFoundException",
    "ServiceUnavailableException",
    "ShiurBankException",
    "ValidationException",
]
