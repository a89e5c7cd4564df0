from shiurbank.application.use_cases.participants.approval import ParticipantApprovalService
from shiurbank.application.use_cases.participants.management import (
    ParticipantManagementService,
)

__all__ = ["ParticipantApprovalService", "ParticipantManagementService"]
