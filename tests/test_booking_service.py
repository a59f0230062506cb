"""
Tests for the BookingService orchestration layer.
"""

import asyncio
from typing import List

import pendulum

from bookingslots.domain.models import BookingSettings, DateException, TimeRange, WeeklyHour
from bookingslots.services.booking_service import BookingService

TZ = "Europe/Madrid"


class StubScheduleRepository:
    """Minimal stub matching ScheduleRepositoryProtocol."""

    def __init__(
        self,
        weekly_hours: List[WeeklyHour],
        special_hours: List[DateException] = (),
        appointments: List[TimeRange] = (),
        settings: BookingSettings = BookingSettings(),
    ):
        self._weekly_hours = list(weekly_hours)
        self._special_hours = list(special_hours)
        self._appointments = list(appointments)
        self._settings = settings
        self.calls: List[tuple] = []

    @property
    def timezone(self) -> str:
        return TZ

    async def get_weekly_hours(self):
        return self._weekly_hours

    async def get_special_hours(self, start_date, end_date):
        self.calls.append(("special_hours", start_date.to_date_string(), end_date.to_date_string()))
        return [s for s in self._special_hours if start_date <= s.date <= end_date]

    async def get_settings(self):
        return self._settings

    async def get_appointments(self, start_time, end_time):
        self.calls.append(("appointments", start_time.to_datetime_string(), end_time.to_datetime_string()))
        window = TimeRange(start=start_time, end=end_time)
        return [a for a in self._appointments if a.overlaps(window)]


def _fixed_clock():
    return pendulum.datetime(2024, 11, 22, 9, 0, tz=TZ)


def test_weekly_availability_fetches_the_whole_week(weekly_schedule):
    """The repository is asked for exactly the seven requested days."""
    repository = StubScheduleRepository(weekly_schedule)
    service = BookingService(repository=repository, clock=_fixed_clock)

    days = asyncio.run(service.weekly_availability("2024-11-25"))

    assert len(days) == 7
    assert ("special_hours", "2024-11-25", "2024-12-01") in repository.calls
    assert ("appointments", "2024-11-25 00:00:00", "2024-12-02 00:00:00") in repository.calls


def test_weekly_availability_uses_settings_duration_and_buffer(weekly_schedule):
    settings = BookingSettings(default_duration=30, buffer_time=5)
    booked = [
        TimeRange(
            start=pendulum.parse("2024-11-25 10:00", tz=TZ),
            end=pendulum.parse("2024-11-25 10:30", tz=TZ),
        )
    ]
    service = BookingService(
        repository=StubScheduleRepository(weekly_schedule, appointments=booked, settings=settings),
        clock=_fixed_clock,
    )

    days = asyncio.run(service.weekly_availability(pendulum.date(2024, 11, 25)))
    monday = {s.start_time: s.available for s in days[0].slots}

    assert list(monday)[:3] == ["09:00", "09:35", "10:10"]
    assert monday["10:10"] is False
    assert monday["10:45"] is True


def test_weekly_availability_duration_override(weekly_schedule):
    service = BookingService(
        repository=StubScheduleRepository(weekly_schedule, settings=BookingSettings(buffer_time=0)),
        clock=_fixed_clock,
    )

    days = asyncio.run(service.weekly_availability("2024-11-30", duration=120))

    assert [s.start_time for s in days[0].slots] == ["10:00", "12:00"]


def test_weekly_availability_honours_special_hours(weekly_schedule):
    special = [DateException(date="2024-11-26", is_open=False, reason="Festivo")]
    service = BookingService(
        repository=StubScheduleRepository(weekly_schedule, special_hours=special),
        clock=_fixed_clock,
    )

    days = asyncio.run(service.weekly_availability("2024-11-25"))

    assert days[0].slots
    assert days[1].slots == []


def test_check_appointment_uses_injected_clock(weekly_schedule):
    clock = lambda: pendulum.datetime(2024, 11, 25, 9, 30, tz=TZ)
    service = BookingService(repository=StubScheduleRepository(weekly_schedule), clock=clock)

    decision = asyncio.run(service.check_appointment(pendulum.parse("2024-11-25 10:00", tz=TZ)))

    assert not decision.is_valid
    assert "2 horas" in decision.reason


def test_check_appointment_explicit_now_overrides_clock(weekly_schedule):
    service = BookingService(repository=StubScheduleRepository(weekly_schedule), clock=_fixed_clock)

    decision = asyncio.run(
        service.check_appointment(
            "2024-11-25 10:00",
            now=pendulum.datetime(2024, 11, 25, 9, 30, tz=TZ),
        )
    )

    assert not decision.is_valid


def test_check_appointment_detects_conflict(weekly_schedule):
    booked = [
        TimeRange(
            start=pendulum.parse("2024-11-25 10:00", tz=TZ),
            end=pendulum.parse("2024-11-25 11:00", tz=TZ),
        )
    ]
    repository = StubScheduleRepository(weekly_schedule, appointments=booked)
    service = BookingService(repository=repository, clock=_fixed_clock)

    decision = asyncio.run(service.check_appointment("2024-11-25 10:30"))

    assert decision.reason == "Ya existe una cita programada en este horario"
    assert ("appointments", "2024-11-25 00:00:00", "2024-11-26 00:00:00") in repository.calls


def test_check_appointment_accepts_free_time(weekly_schedule):
    service = BookingService(repository=StubScheduleRepository(weekly_schedule), clock=_fixed_clock)

    decision = asyncio.run(service.check_appointment("2024-11-25 11:00", duration=45))

    assert decision.is_valid
