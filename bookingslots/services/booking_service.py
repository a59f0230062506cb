"""
Application services for listing availability and checking booking requests.

The service fetches a consistent snapshot of schedule data through a
repository adapter and delegates every decision to the pure domain engine.
The repository is a simple protocol so tests can pass a stub and production
code can plug in a database-backed implementation.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol

import pendulum
from pendulum import DateTime

from ..domain.availability import DAYS_PER_WEEK, AvailabilityCalculator
from ..domain.booking_request import evaluate_booking_request
from ..domain.models import (
    BookingDecision,
    BookingSettings,
    DateException,
    DayAvailability,
    ExistingAppointment,
    WeeklyHour,
    as_calendar_date,
    as_instant,
)

logger = logging.getLogger(__name__)


class ScheduleRepositoryProtocol(Protocol):
    """Protocol describing the data the booking service needs."""

    @property
    def timezone(self) -> str:
        """IANA timezone of the business."""

    async def get_weekly_hours(self) -> List[WeeklyHour]:
        """Return the weekly schedule."""

    async def get_special_hours(self, start_date: Any, end_date: Any) -> List[DateException]:
        """Return the date exceptions within the inclusive date range."""

    async def get_settings(self) -> BookingSettings:
        """Return the booking policy."""

    async def get_appointments(
        self,
        start_time: DateTime,
        end_time: DateTime,
    ) -> List[ExistingAppointment]:
        """Return active appointments overlapping [start_time, end_time)."""


class BookingService:
    """
    Orchestrates schedule retrieval and availability calculation.

    The clock is injected so "now" is never read implicitly by the domain.
    """

    def __init__(
        self,
        repository: ScheduleRepositoryProtocol,
        clock: Optional[Callable[[], DateTime]] = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or pendulum.now

    @property
    def timezone(self) -> str:
        return self._repository.timezone

    def now(self) -> DateTime:
        return self._clock().in_timezone(self.timezone)

    async def weekly_availability(
        self,
        start_date: Any,
        duration: Optional[int] = None,
    ) -> List[DayAvailability]:
        """
        List the slots of the seven days starting at start_date.

        Duration defaults to the business's default duration; the buffer
        always comes from the business settings.
        """
        first_day = as_calendar_date(start_date)
        last_day = first_day.add(days=DAYS_PER_WEEK - 1)

        settings = await self._repository.get_settings()
        weekly_hours = await self._repository.get_weekly_hours()
        special_hours = await self._repository.get_special_hours(first_day, last_day)

        range_start = pendulum.datetime(
            first_day.year, first_day.month, first_day.day, tz=self.timezone
        )
        appointments = await self._repository.get_appointments(
            range_start,
            range_start.add(days=DAYS_PER_WEEK),
        )

        slot_duration = duration if duration is not None else settings.default_duration
        logger.debug(
            "Computing availability from %s (%d min slots, %d min buffer, %d bookings)",
            first_day.to_date_string(),
            slot_duration,
            settings.buffer_time,
            len(appointments),
        )

        calculator = AvailabilityCalculator(
            weekly_schedule=weekly_hours,
            exceptions=special_hours,
            timezone=self.timezone,
        )
        return calculator.compute_weekly_availability(
            existing_appointments=appointments,
            start_date=first_day,
            duration=slot_duration,
            buffer=settings.buffer_time,
        )

    async def check_appointment(
        self,
        start: Any,
        duration: Optional[int] = None,
        now: Optional[Any] = None,
    ) -> BookingDecision:
        """Decide whether an appointment may be booked at start."""
        start_at = as_instant(start, self.timezone).in_timezone(self.timezone)
        day = start_at.date()

        settings = await self._repository.get_settings()
        weekly_hours = await self._repository.get_weekly_hours()
        special_hours = await self._repository.get_special_hours(day, day)

        day_start = pendulum.datetime(day.year, day.month, day.day, tz=self.timezone)
        appointments = await self._repository.get_appointments(day_start, day_start.add(days=1))

        decision = evaluate_booking_request(
            start=start_at,
            duration=duration,
            now=now if now is not None else self.now(),
            weekly_schedule=weekly_hours,
            exceptions=special_hours,
            existing_appointments=appointments,
            settings=settings,
            timezone=self.timezone,
        )

        if not decision.is_valid:
            logger.info("Rejected booking request at %s: %s", start_at, decision.reason)
        return decision
