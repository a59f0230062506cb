"""
Booking-window policy: how soon and how far ahead an appointment may be booked.

The current time is always passed in by the caller, so the same inputs give
the same decision regardless of when the check runs.
"""

import math
from typing import Any

from .models import BookingDecision, BookingSettings, as_instant

MIN_ADVANCE_MESSAGE = "Debe reservar con al menos {hours} horas de anticipación"
MAX_ADVANCE_MESSAGE = "No puede reservar con más de {days} días de anticipación"
SAME_DAY_MESSAGE = "No se permiten reservas para el mismo día"


def _format_quantity(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def validate_booking_window(
    proposed: Any,
    now: Any,
    settings: BookingSettings,
    timezone: str = "UTC"
) -> BookingDecision:
    """
    Decide whether a proposed start time respects the booking window.

    Rules are checked in order and the first failure wins:
    1. at least min_advance_booking_hours ahead (exactly the minimum is fine)
    2. at most max_advance_booking_days ahead, counting started days
    3. not on today's date when same-day booking is disabled

    Args:
        proposed: Proposed appointment start
        now: Current instant
        settings: Booking policy of the business
        timezone: Business timezone for naive values and "same day"

    Returns:
        BookingDecision with a user-facing reason on rejection
    """
    proposed_at = as_instant(proposed, timezone)
    current = as_instant(now, timezone)

    hours_until = (proposed_at - current).total_seconds() / 3600
    if hours_until < settings.min_advance_booking_hours:
        return BookingDecision.reject(
            MIN_ADVANCE_MESSAGE.format(hours=_format_quantity(settings.min_advance_booking_hours))
        )

    days_until = math.ceil(hours_until / 24)
    if days_until > settings.max_advance_booking_days:
        return BookingDecision.reject(
            MAX_ADVANCE_MESSAGE.format(days=_format_quantity(settings.max_advance_booking_days))
        )

    if not settings.allow_same_day_booking:
        proposed_day = proposed_at.in_timezone(timezone).date()
        today = current.in_timezone(timezone).date()
        if proposed_day == today:
            return BookingDecision.reject(SAME_DAY_MESSAGE)

    return BookingDecision.accept()
