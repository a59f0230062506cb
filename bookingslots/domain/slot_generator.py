"""
Generation of candidate slot start times inside an opening window.
"""

import math
from numbers import Real
from typing import List, Optional, Tuple

from .exceptions import InvalidSlotParameterError
from .time_arithmetic import from_minutes, to_minutes


def _whole_minutes(value: object, name: str, allow_zero: bool) -> int:
    """Validate a duration-like argument and return it as an int."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidSlotParameterError(f"{name} must be a number of minutes, got {value!r}")
    if not math.isfinite(value):
        raise InvalidSlotParameterError(f"{name} must be finite, got {value!r}")
    if value != int(value):
        raise InvalidSlotParameterError(f"{name} must be a whole number of minutes, got {value!r}")

    minutes = int(value)
    if minutes < 0 or (minutes == 0 and not allow_zero):
        bound = "zero or greater" if allow_zero else "greater than zero"
        raise InvalidSlotParameterError(f"{name} must be {bound}, got {value!r}")
    return minutes


def validate_slot_parameters(duration: object, buffer: object = 0) -> Tuple[int, int]:
    """Validate a slot duration and buffer, returning both as whole minutes."""
    return (
        _whole_minutes(duration, "duration", allow_zero=False),
        _whole_minutes(buffer, "buffer", allow_zero=True),
    )


def generate_slots(
    open_time: Optional[str],
    close_time: Optional[str],
    duration: int,
    buffer: int = 0
) -> List[str]:
    """
    Return the ordered slot start times that fit in [open_time, close_time].

    Slots start at open_time and advance by duration + buffer. A slot is
    emitted only if it ends at or before close_time, so a trailing partial
    slot is dropped. A missing or inverted window yields no slots.

    Example:
        open 09:00, close 17:00, duration 30, buffer 5
        -> ["09:00", "09:35", "10:10", ...]

    Raises:
        InvalidSlotParameterError: If duration or buffer is unusable
        InvalidTimeFormatError: If a time is malformed
    """
    duration_min, buffer_min = validate_slot_parameters(duration, buffer)

    if open_time is None or close_time is None:
        return []

    start = to_minutes(open_time)
    limit = to_minutes(close_time)
    if start >= limit:
        return []

    step = duration_min + buffer_min
    return [
        from_minutes(cursor)
        for cursor in range(start, limit - duration_min + 1, step)
    ]
