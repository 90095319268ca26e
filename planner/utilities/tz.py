"""Timezone helpers.

Every provider timestamp passes through to_user_tz() before it becomes a
timeline item, so items always carry the user's zone.
"""

from datetime import UTC, date, datetime

from planner.config import get_user_timezone, get_user_timezone_str

__all__ = [
    "get_user_timezone",
    "get_user_timezone_str",
    "now_utc",
    "today_user",
    "to_user_tz",
    "parse_iso_datetime",
]


def now_utc() -> datetime:
    return datetime.now(UTC)


def today_user() -> date:
    """Today's date where the user is."""
    return datetime.now(get_user_timezone()).date()


def to_user_tz(dt: datetime) -> datetime:
    """Express an aware datetime in the user timezone.

    Raises:
        ValueError: For naive datetimes, whose instant is ambiguous
    """
    if dt.tzinfo is None:
        raise ValueError(f"Naive datetime {dt.isoformat()} has no timezone")
    return dt.astimezone(get_user_timezone())


def parse_iso_datetime(value: str, assume_utc: bool = True) -> datetime:
    """Parse an ISO-8601 timestamp as sent by provider APIs.

    Accepts a trailing 'Z' and fractional seconds. Naive values are taken
    as UTC unless assume_utc is False, in which case user timezone is used.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC if assume_utc else get_user_timezone())
    return dt
