"""Enums for newsdesk."""

from enum import Enum


class TimeSlot(str, Enum):
    """Edition time slot, derived from the local time of the run."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"

    def __str__(self) -> str:
        return self.value


class EnrichmentFailureReason(str, Enum):
    """Why an article was dropped during enrichment."""

    API_ERROR = "api_error"
    TRUNCATED_RESPONSE = "truncated_response"
    NON_CONFORMING_RESPONSE = "non_conforming_response"
    UNEXPECTED_ERROR = "unexpected_error"
