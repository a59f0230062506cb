"""
Acceptance check for one concrete appointment request.

Combines the calendar, the operating hours, the booking window and the
already booked appointments into a single decision.
"""

from typing import Any, Iterable, Optional

from .booking_window import validate_booking_window
from .calendar_resolver import find_exception, resolve_day
from .conflicts import has_conflict
from .models import (
    BookingDecision,
    BookingSettings,
    DateException,
    ExistingAppointment,
    TimeRange,
    WeeklyHour,
    as_instant,
    localize_range,
)
from .slot_generator import validate_slot_parameters
from .time_arithmetic import to_minutes

CLOSED_MESSAGE = "El negocio está cerrado este día"
CLOSED_WITH_REASON_MESSAGE = "El negocio está cerrado: {reason}"
UNKNOWN_HOURS_MESSAGE = "No se pudo determinar el horario de operación para este día"
OUTSIDE_HOURS_MESSAGE = "La cita debe estar entre {open_time} y {close_time}"
TIME_CONFLICT_MESSAGE = "Ya existe una cita programada en este horario"


def evaluate_booking_request(
    start: Any,
    duration: Optional[int],
    now: Any,
    weekly_schedule: Iterable[WeeklyHour],
    exceptions: Iterable[DateException],
    existing_appointments: Iterable[ExistingAppointment],
    settings: BookingSettings,
    timezone: str = "UTC"
) -> BookingDecision:
    """
    Decide whether an appointment may be booked at the given start.

    Checks, first failure wins:
    1. the business is open that day
    2. its hours for that day are known
    3. the appointment lies within the opening hours
    4. the booking window (see validate_booking_window)
    5. no overlap with a booked appointment

    Args:
        start: Requested start (naive values are read in the business timezone)
        duration: Length in minutes; defaults to settings.default_duration
        now: Current instant
        weekly_schedule: Weekly hours of the business
        exceptions: Date-specific overrides
        existing_appointments: Booked intervals around the requested day
        settings: Booking policy
        timezone: Business timezone

    Returns:
        BookingDecision
    """
    if duration is None:
        duration = settings.default_duration
    duration, _ = validate_slot_parameters(duration)

    exceptions = list(exceptions)
    local_start = as_instant(start, timezone).in_timezone(timezone)
    day = local_start.date()

    window = resolve_day(day, weekly_schedule, exceptions)
    if not window.is_open:
        exception = find_exception(exceptions, day)
        if exception is not None and exception.reason:
            return BookingDecision.reject(CLOSED_WITH_REASON_MESSAGE.format(reason=exception.reason))
        return BookingDecision.reject(CLOSED_MESSAGE)

    if not window.has_hours:
        return BookingDecision.reject(UNKNOWN_HOURS_MESSAGE)

    start_minutes = local_start.hour * 60 + local_start.minute
    end_minutes = start_minutes + duration
    if start_minutes < to_minutes(window.open_time) or end_minutes > to_minutes(window.close_time):
        return BookingDecision.reject(
            OUTSIDE_HOURS_MESSAGE.format(open_time=window.open_time, close_time=window.close_time)
        )

    window_decision = validate_booking_window(local_start, now, settings, timezone)
    if not window_decision.is_valid:
        return window_decision

    requested = TimeRange(start=local_start, end=local_start.add(minutes=duration))
    booked = [localize_range(appointment, timezone) for appointment in existing_appointments]
    if has_conflict(requested, booked):
        return BookingDecision.reject(TIME_CONFLICT_MESSAGE)

    return BookingDecision.accept()
