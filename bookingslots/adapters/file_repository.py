"""
File-backed schedule repository.

Stands in for the persistence layer: business hours and settings come from
the YAML config, booked appointments from a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pendulum
from pendulum import DateTime

from ..config import AppConfig
from ..domain.exceptions import ScheduleDataError
from ..domain.models import (
    BookingSettings,
    DateException,
    ExistingAppointment,
    TimeRange,
    WeeklyHour,
    as_calendar_date,
)

logger = logging.getLogger(__name__)

# Appointments in these states no longer block their time
INACTIVE_STATUSES = frozenset({"CANCELLED", "NO_SHOW"})


class FileScheduleRepository:
    """
    Repository reading one business's schedule from local files.

    The appointments file holds a JSON list of objects with ``start`` and
    ``end`` ISO timestamps and an optional ``status``. Timestamps without an
    offset are read in the business timezone.
    """

    def __init__(self, config: AppConfig, appointments_file: Optional[Path] = None):
        """
        Initialize the repository.

        Args:
            config: Loaded application configuration
            appointments_file: Overrides config.appointments_file when given
        """
        self.config = config
        self.appointments_file = appointments_file or config.appointments_file
        self._appointment_records = self._load_appointment_records()

    @property
    def timezone(self) -> str:
        return self.config.timezone

    def _load_appointment_records(self) -> List[Dict[str, Any]]:
        """Load raw appointment records from the JSON file."""
        if self.appointments_file is None:
            return []

        data_file = Path(self.appointments_file)
        if not data_file.exists():
            logger.warning("Appointments file %s not found; assuming no bookings", data_file)
            return []

        try:
            with open(data_file, "r", encoding="utf-8") as f:
                records = json.load(f)
        except json.JSONDecodeError as exc:
            raise ScheduleDataError(f"Invalid JSON in {data_file}: {exc}") from exc

        if not isinstance(records, list):
            raise ScheduleDataError(f"{data_file} must contain a list of appointments")

        return records

    async def get_weekly_hours(self) -> List[WeeklyHour]:
        return self.config.to_weekly_schedule()

    async def get_special_hours(self, start_date: Any, end_date: Any) -> List[DateException]:
        """Return special hours whose date lies within [start_date, end_date]."""
        first = as_calendar_date(start_date)
        last = as_calendar_date(end_date)
        return [
            exception for exception in self.config.to_exceptions()
            if first <= exception.date <= last
        ]

    async def get_settings(self) -> BookingSettings:
        return self.config.to_booking_settings()

    async def get_appointments(
        self,
        start_time: DateTime,
        end_time: DateTime
    ) -> List[ExistingAppointment]:
        """
        Return active appointments overlapping [start_time, end_time).

        Malformed records are skipped with a warning.
        """
        window = TimeRange(start=start_time, end=end_time)
        appointments: List[ExistingAppointment] = []

        for record in self._appointment_records:
            if str(record.get("status", "")).upper() in INACTIVE_STATUSES:
                continue

            try:
                appointment = TimeRange(
                    start=pendulum.parse(record["start"], tz=self.timezone),
                    end=pendulum.parse(record["end"], tz=self.timezone),
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid appointment record %r: %s", record, exc)
                continue

            if appointment.overlaps(window):
                appointments.append(appointment)

        logger.debug(
            "Loaded %d appointment(s) between %s and %s",
            len(appointments),
            start_time,
            end_time,
        )
        return appointments
