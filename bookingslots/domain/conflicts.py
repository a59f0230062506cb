"""
Overlap detection between a candidate interval and booked appointments.
"""

from typing import Iterable

from .models import TimeRange


def intervals_overlap(first: TimeRange, second: TimeRange) -> bool:
    """
    Half-open overlap test, symmetric in its arguments.

    An appointment ending exactly when another starts is not a conflict.
    """
    return first.overlaps(second)


def has_conflict(candidate: TimeRange, existing: Iterable[TimeRange]) -> bool:
    """Return True if the candidate overlaps any existing interval."""
    return any(intervals_overlap(candidate, booked) for booked in existing)
