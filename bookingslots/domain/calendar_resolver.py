"""
Resolution of the effective opening hours of a calendar date.

A date-specific exception always decides whether the business is open; the
weekly schedule only fills in the times the exception leaves out.
"""

from typing import Any, Iterable, Optional

from .models import (
    DateException,
    EffectiveWindow,
    WeeklyHour,
    as_calendar_date,
    day_of_week,
)


def find_weekly_hour(
    weekly_schedule: Iterable[WeeklyHour],
    dow: int
) -> Optional[WeeklyHour]:
    """Return the weekly hour configured for a day of week, if any."""
    for weekly_hour in weekly_schedule:
        if weekly_hour.day_of_week == dow:
            return weekly_hour
    return None


def find_exception(
    exceptions: Iterable[DateException],
    target_date: Any
) -> Optional[DateException]:
    """Return the exception registered for exactly this calendar date, if any."""
    target = as_calendar_date(target_date)
    for exception in exceptions:
        if exception.date == target:
            return exception
    return None


def resolve_day(
    target_date: Any,
    weekly_schedule: Iterable[WeeklyHour],
    exceptions: Iterable[DateException]
) -> EffectiveWindow:
    """
    Compute the effective open/closed state and hours for a date.

    Missing configuration is not an error: a day without a weekly hour
    resolves to closed.

    Args:
        target_date: Date to resolve (date, datetime or YYYY-MM-DD string)
        weekly_schedule: Weekly hours, at most one per day of week
        exceptions: Date-specific overrides, at most one per date

    Returns:
        EffectiveWindow for the date
    """
    day = as_calendar_date(target_date)
    weekly_hour = find_weekly_hour(weekly_schedule, day_of_week(day))
    exception = find_exception(exceptions, day)

    base_open = weekly_hour.open_time if weekly_hour else None
    base_close = weekly_hour.close_time if weekly_hour else None

    if exception is not None:
        return EffectiveWindow(
            is_open=exception.is_open,
            open_time=exception.open_time if exception.open_time is not None else base_open,
            close_time=exception.close_time if exception.close_time is not None else base_close,
        )

    if weekly_hour is None:
        return EffectiveWindow(is_open=False)

    return EffectiveWindow(
        is_open=weekly_hour.is_open,
        open_time=base_open,
        close_time=base_close,
    )
