"""
Shared fixtures for the booking engine tests.
"""

import pendulum
import pytest

from bookingslots.domain.models import BookingSettings, WeeklyHour


@pytest.fixture
def weekly_schedule():
    """Monday to Friday 09:00-17:00, Saturday 10:00-14:00, closed Sunday."""
    hours = [
        WeeklyHour(day_of_week=day, is_open=True, open_time="09:00", close_time="17:00")
        for day in range(1, 6)
    ]
    hours.append(WeeklyHour(day_of_week=6, is_open=True, open_time="10:00", close_time="14:00"))
    hours.append(WeeklyHour(day_of_week=0, is_open=False))
    return hours


@pytest.fixture
def settings():
    return BookingSettings(
        default_duration=30,
        buffer_time=5,
        max_advance_booking_days=30,
        min_advance_booking_hours=2,
        allow_same_day_booking=True,
    )


@pytest.fixture
def monday():
    return pendulum.date(2024, 11, 25)
