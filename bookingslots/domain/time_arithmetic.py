"""
Conversions and comparisons for naive local "HH:MM" time strings.

Business hours are stored as plain wall-clock strings. Everything that needs
to compare or step through them converts to minutes since midnight first.
"""

import re

from .exceptions import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")


def is_valid_time(value: object) -> bool:
    """Return True if value is a 24-hour H:MM or HH:MM string."""
    if not isinstance(value, str):
        return False
    return _TIME_PATTERN.fullmatch(value) is not None


def to_minutes(value: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    Raises:
        InvalidTimeFormatError: If the value is not a valid time string
    """
    if not isinstance(value, str):
        raise InvalidTimeFormatError(f"Invalid time format {value!r} (use HH:MM)")

    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidTimeFormatError(f"Invalid time format {value!r} (use HH:MM)")

    hours, minutes = match.groups()
    return int(hours) * 60 + int(minutes)


def from_minutes(minutes: int) -> str:
    """
    Convert minutes since midnight back to a zero-padded "HH:MM" string.

    Raises:
        ValueError: If minutes is not a whole number within a single day
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise ValueError(f"Minutes must be an integer, got {minutes!r}")
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes must be between 0 and {MINUTES_PER_DAY - 1}, got {minutes}")

    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def is_before(first: str, second: str) -> bool:
    """Check whether the first time is strictly earlier than the second."""
    return to_minutes(first) < to_minutes(second)


def duration_minutes(start: str, end: str) -> int:
    """
    Return the minutes between two times.

    The result is negative when end is earlier than start; callers validate
    the ordering themselves.
    """
    return to_minutes(end) - to_minutes(start)


def is_valid_time_range(start: object, end: object) -> bool:
    """Check that both values are valid times and start is before end."""
    if not (is_valid_time(start) and is_valid_time(end)):
        return False
    return is_before(start, end)
