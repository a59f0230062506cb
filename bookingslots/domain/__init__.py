"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityCalculator, compute_weekly_availability
from .booking_request import evaluate_booking_request
from .booking_window import validate_booking_window
from .calendar_resolver import resolve_day
from .conflicts import has_conflict, intervals_overlap
from .models import (
    BookingDecision,
    BookingSettings,
    DateException,
    DayAvailability,
    EffectiveWindow,
    ExistingAppointment,
    Slot,
    TimeRange,
    WeeklyHour,
)
from .slot_generator import generate_slots

__all__ = [
    "AvailabilityCalculator",
    "BookingDecision",
    "BookingSettings",
    "DateException",
    "DayAvailability",
    "EffectiveWindow",
    "ExistingAppointment",
    "Slot",
    "TimeRange",
    "WeeklyHour",
    "compute_weekly_availability",
    "evaluate_booking_request",
    "generate_slots",
    "has_conflict",
    "intervals_overlap",
    "resolve_day",
    "validate_booking_window",
]
