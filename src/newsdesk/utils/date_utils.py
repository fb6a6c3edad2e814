"""Date and time utilities."""

from datetime import datetime, time

from newsdesk.core.enums import TimeSlot

MORNING_END = time(8, 0)
AFTERNOON_END = time(16, 0)


def time_slot_for(moment: time) -> TimeSlot:
    """Classify a local time of day into an edition time slot.

    Args:
        moment: Local wall-clock time

    Returns:
        MORNING for [00:00, 08:00), AFTERNOON for [08:00, 16:00),
        EVENING otherwise.
    """
    if moment < MORNING_END:
        return TimeSlot.MORNING
    if moment < AFTERNOON_END:
        return TimeSlot.AFTERNOON
    return TimeSlot.EVENING


def now_local() -> datetime:
    """Get the current local datetime (naive, system timezone)."""
    return datetime.now()


def format_local_date(dt: datetime) -> str:
    """Format a datetime as YYYY-MM-DD."""
    return dt.strftime("%Y-%m-%d")


def format_local_time(dt: datetime) -> str:
    """Format a datetime as HH:MM:SS.ffffff."""
    return dt.strftime("%H:%M:%S.%f")
