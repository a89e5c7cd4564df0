"""Domain enumerations for the ShiurBank application."""

from enum import Enum


class SearchResultType(str, Enum):
    """Kind of search hit; serialized as the result's ``type``."""

    SERIES = "SERIES"
    RECORDING = "RECORDING"


class MembershipState(str, Enum):
    """Where a user stands in the participant approval workflow for one series.

    NO_RECORD -> PENDING (apply, restricted series)
    NO_RECORD -> PARTICIPANT (apply, open series)
    PENDING -> PARTICIPANT (gabbai approves)
    PENDING -> NO_RECORD (gabbai rejects)
    """

    NO_RECORD = "no-record"
    PENDING = "pending"
    PARTICIPANT = "participant"


class RecordingSort(str, Enum):
    """Sort order for a series' recordings (by recorded_at)."""

    NEWEST = "newest"
    OLDEST = "oldest"

    @classmethod
    def parse(cls, value: str | None) -> "RecordingSort":
        """Return the matching sort order; anything unknown means newest first."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.NEWEST


class SubscriptionState(str, Enum):
    """Subscription status derived from the stored SNS subscription ARN."""

    NONE = "none"
    PENDING = "pending"
    CONFIRMED = "confirmed"
