"""Persistence models: ORM entities and mixins."""

from shiurbank.infrastructure.persistence.models.catalog import Rebbi, Topic
from shiurbank.infrastructure.persistence.models.mixins import CreatedAtMixin
from shiurbank.infrastructure.persistence.models.recording import (
    FavoriteShiur,
    ShiurRecording,
)
from shiurbank.infrastructure.persistence.models.series import (
    Gabbai,
    PendingParticipant,
    SeriesPendingApproval,
    ShiurParticipant,
    ShiurSeries,
)
from shiurbank.infrastructure.persistence.models.subscription import (
    Subscriber,
    SubscriberType,
)
from shiurbank.infrastructure.persistence.models.user import (
    Admin,
    Institution,
    User,
    UserInstitution,
)

__all__ = [
    "Admin",
    "CreatedAtMixin",
    "FavoriteShiur",
    "Gabbai",
    "Institution",
    "PendingParticipant",
    "Rebbi",
    "SeriesPendingApproval",
    "ShiurParticipant",
    "ShiurRecording",
    "ShiurSeries",
    "Subscriber",
    "SubscriberType",
    "Topic",
    "User",
    "UserInstitution",
]
