"""
Configuration management using Pydantic models loaded from YAML.

One config file describes one business: its timezone, booking policy,
weekly hours and special hours.
"""

import datetime as dt
from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import BookingSettings, DateException, WeeklyHour, get_day_name
from .domain.time_arithmetic import is_before, is_valid_time


class AppointmentSettingsConfig(BaseModel):
    """Booking policy with the bounds accepted by the dashboard."""
    default_duration: int = Field(default=30, ge=15, le=480)
    buffer_time: int = Field(default=5, ge=0, le=60)
    max_advance_booking_days: int = Field(default=30, ge=1, le=365)
    min_advance_booking_hours: float = Field(default=2, ge=0, le=168)
    allow_same_day_booking: bool = True

    def to_booking_settings(self) -> BookingSettings:
        return BookingSettings(
            default_duration=self.default_duration,
            buffer_time=self.buffer_time,
            max_advance_booking_days=self.max_advance_booking_days,
            min_advance_booking_hours=self.min_advance_booking_hours,
            allow_same_day_booking=self.allow_same_day_booking,
        )


class BusinessHourConfig(BaseModel):
    """Opening hours for one day of the week (0=Sunday)."""
    day_of_week: int = Field(ge=0, le=6)
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None

    @model_validator(mode="after")
    def validate_hours(self) -> "BusinessHourConfig":
        """Open days need valid times, and opening must precede closing."""
        if not self.is_open:
            return self

        label = f"Día {get_day_name(self.day_of_week)}"
        if not self.open_time or not self.close_time:
            raise ValueError(f"{label}: Debe especificar horarios de apertura y cierre")
        if not is_valid_time(self.open_time) or not is_valid_time(self.close_time):
            raise ValueError(f"{label}: Formato de hora inválido (use HH:MM)")
        if not is_before(self.open_time, self.close_time):
            raise ValueError(f"{label}: La hora de apertura debe ser anterior a la de cierre")
        return self

    def to_weekly_hour(self) -> WeeklyHour:
        return WeeklyHour(
            day_of_week=self.day_of_week,
            is_open=self.is_open,
            open_time=self.open_time if self.is_open else None,
            close_time=self.close_time if self.is_open else None,
        )


class SpecialHourConfig(BaseModel):
    """Override of one calendar date (holiday, vacation, event)."""
    date: dt.date
    is_open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    reason: Optional[str] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def validate_hours(self) -> "SpecialHourConfig":
        """An open special day must state both times."""
        if not self.is_open:
            return self

        if not self.open_time or not self.close_time:
            raise ValueError(
                f"{self.date.isoformat()}: Debe especificar horarios de apertura y cierre"
            )
        if not is_valid_time(self.open_time) or not is_valid_time(self.close_time):
            raise ValueError(f"{self.date.isoformat()}: Formato de hora inválido (use HH:MM)")
        if not is_before(self.open_time, self.close_time):
            raise ValueError(
                f"{self.date.isoformat()}: La hora de apertura debe ser anterior a la de cierre"
            )
        return self

    def to_exception(self) -> DateException:
        return DateException(
            date=self.date,
            is_open=self.is_open,
            open_time=self.open_time if self.is_open else None,
            close_time=self.close_time if self.is_open else None,
            reason=self.reason,
            description=self.description,
        )


def default_business_hours() -> List[BusinessHourConfig]:
    """Monday to Friday 09:00-18:00, closed on weekends."""
    hours = [
        BusinessHourConfig(day_of_week=day, is_open=True, open_time="09:00", close_time="18:00")
        for day in range(1, 6)
    ]
    hours.append(BusinessHourConfig(day_of_week=6, is_open=False))
    hours.append(BusinessHourConfig(day_of_week=0, is_open=False))
    return hours


class AppConfig(BaseModel):
    """Application configuration."""
    business_name: str = "Mi negocio"
    timezone: str = "UTC"
    settings: AppointmentSettingsConfig = Field(default_factory=AppointmentSettingsConfig)
    weekly_hours: List[BusinessHourConfig] = Field(default_factory=default_business_hours)
    special_hours: List[SpecialHourConfig] = Field(default_factory=list)
    appointments_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("weekly_hours")
    @classmethod
    def validate_weekly_hours(cls, value: List[BusinessHourConfig]) -> List[BusinessHourConfig]:
        """Ensure each day of the week is configured at most once."""
        seen: set[int] = set()
        for hour in value:
            if hour.day_of_week in seen:
                raise ValueError(f"Duplicate weekly hours for day_of_week {hour.day_of_week}")
            seen.add(hour.day_of_week)
        return value

    @field_validator("special_hours")
    @classmethod
    def validate_special_hours(cls, value: List[SpecialHourConfig]) -> List[SpecialHourConfig]:
        """Ensure there is at most one special hour per date."""
        seen: set[dt.date] = set()
        for special in value:
            if special.date in seen:
                raise ValueError(
                    f"Ya existe un horario especial para esta fecha: {special.date.isoformat()}"
                )
            seen.add(special.date)
        return value

    def to_weekly_schedule(self) -> List[WeeklyHour]:
        return [hour.to_weekly_hour() for hour in self.weekly_hours]

    def to_exceptions(self) -> List[DateException]:
        return [special.to_exception() for special in self.special_hours]

    def to_booking_settings(self) -> BookingSettings:
        return self.settings.to_booking_settings()

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative appointments_file is resolved against the config file's
        directory.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.appointments_file is not None and not config.appointments_file.is_absolute():
            config.appointments_file = config_path.parent / config.appointments_file
        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
