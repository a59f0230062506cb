"""
Domain-specific exception hierarchy for the booking slot engine.
"""


class BookingEngineError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormatError(BookingEngineError, ValueError):
    """Raised when a time string is not a valid 24-hour HH:MM value."""


class InvalidSlotParameterError(BookingEngineError, ValueError):
    """Raised when a slot duration or buffer is not a usable number of minutes."""


class ScheduleConfigurationError(BookingEngineError, ValueError):
    """Raised when weekly hours, special hours or settings are inconsistent."""


class ScheduleDataError(BookingEngineError):
    """Raised when schedule or appointment data cannot be loaded or parsed."""
