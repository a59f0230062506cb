"""
Weekly availability: bookable slots for seven consecutive days.

This is pure domain logic without any external dependencies (no database,
no clock, no I/O). Callers supply a consistent snapshot of the schedule and
the appointments already booked in the requested range.
"""

from datetime import timedelta
from typing import Any, Iterable, List, Optional

import pendulum
from pendulum import Date

from .calendar_resolver import resolve_day
from .conflicts import has_conflict
from .models import (
    DateException,
    DayAvailability,
    EffectiveWindow,
    ExistingAppointment,
    Slot,
    TimeRange,
    WeeklyHour,
    as_calendar_date,
    day_of_week,
    get_day_name,
    localize_range,
)
from .slot_generator import generate_slots, validate_slot_parameters
from .time_arithmetic import to_minutes

DAYS_PER_WEEK = 7


class AvailabilityCalculator:
    """
    Calculates bookable slots for one business.

    Algorithm, per day:
    1. Resolve the effective window (weekly hours + date exception)
    2. Closed days, or days without known hours, get no slots
    3. Generate candidate start times for the window
    4. Mark each candidate unavailable if it overlaps a booked appointment
    """

    def __init__(
        self,
        weekly_schedule: Iterable[WeeklyHour],
        exceptions: Iterable[DateException] = (),
        timezone: str = "UTC"
    ):
        self.weekly_schedule = list(weekly_schedule)
        self.exceptions = list(exceptions)
        self.timezone = timezone

    def resolve_day(self, target_date: Any) -> EffectiveWindow:
        """Effective window for a single date."""
        return resolve_day(target_date, self.weekly_schedule, self.exceptions)

    def compute_weekly_availability(
        self,
        existing_appointments: Iterable[ExistingAppointment],
        start_date: Any,
        duration: int,
        buffer: int = 0
    ) -> List[DayAvailability]:
        """
        Compute seven day records starting at start_date (inclusive).

        Args:
            existing_appointments: Booked intervals covering the week
            start_date: First day of the week to compute
            duration: Slot length in minutes
            buffer: Idle minutes between consecutive slots

        Returns:
            One DayAvailability per day, in date order
        """
        validate_slot_parameters(duration, buffer)
        first_day = as_calendar_date(start_date)
        appointments = list(existing_appointments)

        return [
            self.compute_day(
                first_day + timedelta(days=offset),
                appointments,
                duration,
                buffer
            )
            for offset in range(DAYS_PER_WEEK)
        ]

    def compute_day(
        self,
        target_date: Any,
        existing_appointments: Iterable[ExistingAppointment],
        duration: int,
        buffer: int = 0
    ) -> DayAvailability:
        """Compute the slot list of one day."""
        day = as_calendar_date(target_date)
        availability = DayAvailability(date=day, day_name=get_day_name(day_of_week(day)))

        window = self.resolve_day(day)
        if not window.has_hours:
            return availability

        start_times = generate_slots(window.open_time, window.close_time, duration, buffer)
        if not start_times:
            return availability

        booked = self._appointments_for_day(day, existing_appointments)

        for start_time in start_times:
            candidate = self._slot_range(day, start_time, duration)
            if candidate is None:
                continue
            availability.slots.append(
                Slot(
                    date=day,
                    start_time=start_time,
                    available=not has_conflict(candidate, booked)
                )
            )

        return availability

    def _slot_range(self, day: Date, start_time: str, duration: int) -> Optional[TimeRange]:
        """
        Build the concrete [start, start + duration) interval of a slot.

        Returns None for wall-clock times skipped by a DST transition.
        """
        hour, minute = divmod(to_minutes(start_time), 60)
        start = pendulum.datetime(day.year, day.month, day.day, hour, minute, tz=self.timezone)
        if (start.hour, start.minute) != (hour, minute):
            return None
        return TimeRange(start=start, end=start.add(minutes=int(duration)))

    def _appointments_for_day(
        self,
        day: Date,
        appointments: Iterable[ExistingAppointment]
    ) -> List[ExistingAppointment]:
        """Keep only the appointments that touch the given local day."""
        day_start = pendulum.datetime(day.year, day.month, day.day, tz=self.timezone)
        day_range = TimeRange(start=day_start, end=day_start.add(days=1))
        localized = (localize_range(appointment, self.timezone) for appointment in appointments)
        return [appointment for appointment in localized if appointment.overlaps(day_range)]


def compute_weekly_availability(
    weekly_schedule: Iterable[WeeklyHour],
    exceptions: Iterable[DateException],
    existing_appointments: Iterable[ExistingAppointment],
    start_date: Any,
    duration: int,
    buffer: int = 0,
    timezone: str = "UTC"
) -> List[DayAvailability]:
    """Functional entry point around AvailabilityCalculator."""
    calculator = AvailabilityCalculator(
        weekly_schedule=weekly_schedule,
        exceptions=exceptions,
        timezone=timezone
    )
    return calculator.compute_weekly_availability(
        existing_appointments=existing_appointments,
        start_date=start_date,
        duration=duration,
        buffer=buffer
    )
