"""Calendar date parsing shared by validation and statistics."""

from typing import Any

import pendulum


def parse_date(value: Any) -> pendulum.DateTime | None:  # pyright: ignore[reportExplicitAny,reportAny]
    """Parse a stored date value into a UTC-anchored DateTime.

    Accepts ISO-8601 dates and datetimes as well as the looser formats the
    browser front end used to write. Values without a timezone are taken
    as UTC.

    Args:
        value: The raw field value.

    Returns:
        The parsed DateTime, or None when the value is not a string or does
        not describe a calendar date.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed = pendulum.parse(value, strict=False)
    except (ValueError, OverflowError):
        return None

    if isinstance(parsed, pendulum.DateTime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC")
    # Times of day and durations are not calendar dates
    return None


def is_valid_date(value: Any) -> bool:  # pyright: ignore[reportExplicitAny,reportAny]
    return parse_date(value) is not None


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string, used for record timestamps."""
    return pendulum.now("UTC").to_iso8601_string()
