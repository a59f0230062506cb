"""
Domain models for business hours, booked intervals and availability results.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pendulum
from pendulum import Date, DateTime

from .exceptions import ScheduleConfigurationError
from .time_arithmetic import is_before, is_valid_time

# Index 0 is Sunday, matching WeeklyHour.day_of_week
DAY_NAMES = ("Domingo", "Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado")


def get_day_name(day_of_week: int) -> str:
    """Return the fixed display name for a day of week (0=Sunday)."""
    if day_of_week not in range(7):
        raise ValueError(f"day_of_week must be between 0 and 6, got {day_of_week}")
    return DAY_NAMES[day_of_week]


def day_of_week(value: date) -> int:
    """Return the day of week with 0=Sunday, 6=Saturday."""
    return value.isoweekday() % 7


def as_calendar_date(value: Any) -> Date:
    """
    Reduce a date, datetime or "YYYY-MM-DD" string to a calendar date.

    Datetimes keep the date they show in their own timezone.
    """
    if isinstance(value, datetime):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, str):
        return pendulum.from_format(value.strip(), "YYYY-MM-DD").date()
    raise TypeError(f"Cannot interpret {value!r} as a calendar date")


def as_instant(value: Any, timezone: str = "UTC") -> DateTime:
    """
    Convert a datetime or ISO string to a timezone-aware pendulum DateTime.

    Naive values are interpreted in the given (business) timezone.
    """
    if isinstance(value, str):
        return pendulum.parse(value, tz=timezone)
    if isinstance(value, datetime):
        return pendulum.instance(value, tz=timezone)
    raise TypeError(f"Cannot interpret {value!r} as a point in time")


def _check_time(value: Optional[str], label: str) -> None:
    if value is not None and not is_valid_time(value):
        raise ScheduleConfigurationError(f"{label}: invalid time format {value!r} (use HH:MM)")


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable half-open time range [start, end).

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another. Touching ranges do not overlap."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


# An already booked appointment, as supplied by the persistence layer.
ExistingAppointment = TimeRange


def localize_range(value: TimeRange, timezone: str = "UTC") -> TimeRange:
    """Return the range with both bounds as aware instants; naive bounds are read in timezone."""
    return TimeRange(start=as_instant(value.start, timezone), end=as_instant(value.end, timezone))



@dataclass(frozen=True)
class WeeklyHour:
    """
    Recurring opening hours for one day of the week.

    Overnight windows (close time before open time) are not supported and
    are rejected here.
    """
    day_of_week: int  # 0=Sunday, 6=Saturday
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None

    def __post_init__(self):
        if self.day_of_week not in range(7):
            raise ScheduleConfigurationError(
                f"day_of_week must be between 0 and 6, got {self.day_of_week}"
            )
        if not self.is_open:
            return

        label = f"Día {get_day_name(self.day_of_week)}"
        if self.open_time is None or self.close_time is None:
            raise ScheduleConfigurationError(
                f"{label}: open days need both an opening and a closing time"
            )
        _check_time(self.open_time, label)
        _check_time(self.close_time, label)
        if not is_before(self.open_time, self.close_time):
            raise ScheduleConfigurationError(
                f"{label}: opening time {self.open_time} must be before closing time "
                f"{self.close_time} (overnight schedules are not supported)"
            )

    @property
    def day_name(self) -> str:
        return get_day_name(self.day_of_week)


@dataclass(frozen=True)
class DateException:
    """
    A one-off override of a single calendar date (holiday, vacation, event).

    Times left as None are inherited from the matching weekly hour.
    """
    date: Date
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    reason: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "date", as_calendar_date(self.date))

        label = f"Horario especial {self.date.to_date_string()}"
        _check_time(self.open_time, label)
        _check_time(self.close_time, label)
        if (
            self.open_time is not None
            and self.close_time is not None
            and not is_before(self.open_time, self.close_time)
        ):
            raise ScheduleConfigurationError(
                f"{label}: opening time {self.open_time} must be before closing time "
                f"{self.close_time} (overnight schedules are not supported)"
            )


@dataclass(frozen=True)
class BookingSettings:
    """Per-business booking policy."""
    default_duration: int = 30
    buffer_time: int = 5
    max_advance_booking_days: int = 30
    min_advance_booking_hours: float = 2
    allow_same_day_booking: bool = True

    def __post_init__(self):
        if self.default_duration <= 0:
            raise ScheduleConfigurationError("default_duration must be greater than zero")
        if self.buffer_time < 0:
            raise ScheduleConfigurationError("buffer_time must not be negative")
        if self.max_advance_booking_days <= 0:
            raise ScheduleConfigurationError("max_advance_booking_days must be greater than zero")
        if self.min_advance_booking_hours < 0:
            raise ScheduleConfigurationError("min_advance_booking_hours must not be negative")


@dataclass(frozen=True)
class EffectiveWindow:
    """Resolved opening state and hours of one calendar date."""
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None

    @property
    def has_hours(self) -> bool:
        """True when the day is open and both boundaries are known."""
        return self.is_open and self.open_time is not None and self.close_time is not None


@dataclass(frozen=True)
class Slot:
    """A candidate appointment start time on a given date."""
    date: Date
    start_time: str
    available: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.start_time, "available": self.available}


@dataclass
class DayAvailability:
    """
    Slots of one day as returned to HTTP handlers.
    """
    date: Date
    day_name: str
    slots: List[Slot] = field(default_factory=list)

    @property
    def available_slots(self) -> List[Slot]:
        return [slot for slot in self.slots if slot.available]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the plain structure consumed by the API layer."""
        return {
            "date": self.date.to_date_string(),
            "dayName": self.day_name,
            "slots": [slot.to_dict() for slot in self.slots],
        }


@dataclass(frozen=True)
class BookingDecision:
    """Outcome of a booking policy check."""
    is_valid: bool
    reason: Optional[str] = None

    @classmethod
    def accept(cls) -> "BookingDecision":
        return cls(is_valid=True)

    @classmethod
    def reject(cls, reason: str) -> "BookingDecision":
        return cls(is_valid=False, reason=reason)
