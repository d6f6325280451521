"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, datetime, tzinfo


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def same_calendar_month(moment: datetime, reference: datetime, tz: tzinfo) -> bool:
    """
    Check whether two instants fall in the same calendar month in ``tz``.

    Naive datetimes are treated as UTC.

    Args:
        moment: Instant to check
        reference: Instant defining the month
        tz: Timezone whose calendar is used

    Returns:
        True if year and month match
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)

    local = moment.astimezone(tz)
    ref_local = reference.astimezone(tz)
    return (local.year, local.month) == (ref_local.year, ref_local.month)
