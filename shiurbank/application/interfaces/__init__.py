"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from shiurbank.infrastructure or shiurbank.api.
"""

from shiurbank.application.interfaces.repositories import (
    IAdminRepository,
    IApplicationRepository,
    IInstitutionRepository,
    IMembershipRepository,
    IRebbiRepository,
    IRecordingRepository,
    ISearchRepository,
    ISeriesRepository,
    ISubscriberRepository,
    ITopicRepository,
    IUserRepository,
)
from shiurbank.application.interfaces.services import IDatabaseControl, INotificationService
from shiurbank.application.interfaces.storage import IStorageService

__all__ = [
    "IAdminRepository",
    "IApplicationRepository",
    "IDatabaseControl",
    "IInstitutionRepository",
    "IMembershipRepository",
    "INotificationService",
    "IRebbiRepository",
    "IRecordingRepository",
    "ISearchRepository",
    "ISeriesRepository",
    "IStorageService",
    "ISubscriberRepository",
    "ITopicRepository",
    "IUserRepository",
]
