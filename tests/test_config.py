"""
Tests for YAML configuration loading.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from bookingslots.config import AppConfig, AppointmentSettingsConfig, BusinessHourConfig

CONFIG_YAML = """
business_name: "Barbería Central"
timezone: "America/Bogota"
settings:
  default_duration: 45
  buffer_time: 10
  max_advance_booking_days: 60
  min_advance_booking_hours: 4
  allow_same_day_booking: false
weekly_hours:
  - {day_of_week: 1, is_open: true, open_time: "09:00", close_time: "18:00"}
  - {day_of_week: 0, is_open: false}
special_hours:
  - date: 2024-12-25
    is_open: false
    reason: "Navidad"
appointments_file: appointments.json
"""


def _write(tmp_path, content: str):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadFromYaml:
    """Tests for AppConfig.load_from_yaml."""

    def test_loads_full_config(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, CONFIG_YAML))

        assert config.business_name == "Barbería Central"
        assert config.timezone == "America/Bogota"
        assert config.settings.default_duration == 45
        assert config.special_hours[0].date == date(2024, 12, 25)

    def test_relative_appointments_file_is_resolved_next_to_config(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, CONFIG_YAML))

        assert config.appointments_file == tmp_path / "appointments.json"

    def test_converts_to_domain_models(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, CONFIG_YAML))

        settings = config.to_booking_settings()
        schedule = config.to_weekly_schedule()
        exceptions = config.to_exceptions()

        assert settings.allow_same_day_booking is False
        assert settings.min_advance_booking_hours == 4
        assert [(h.day_of_week, h.is_open) for h in schedule] == [(1, True), (0, False)]
        assert exceptions[0].reason == "Navidad"
        assert exceptions[0].is_open is False

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config.timezone == "UTC"
        assert config.settings.default_duration == 30
        assert len(config.weekly_hours) == 7
        open_days = sorted(h.day_of_week for h in config.weekly_hours if h.is_open)
        assert open_days == [1, 2, 3, 4, 5]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml_raises_value_error(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(_write(tmp_path, "weekly_hours: [unclosed"))

    def test_non_mapping_root_raises(self, tmp_path):
        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(_write(tmp_path, "- just\n- a list\n"))


class TestValidation:
    """Tests for configuration validation rules."""

    def test_rejects_unknown_timezone(self):
        with pytest.raises(ValidationError):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_rejects_duplicate_weekdays(self):
        with pytest.raises(ValidationError, match="Duplicate weekly hours"):
            AppConfig(weekly_hours=[
                {"day_of_week": 1, "is_open": False},
                {"day_of_week": 1, "is_open": False},
            ])

    def test_rejects_duplicate_special_dates(self):
        with pytest.raises(ValidationError, match="Ya existe un horario especial"):
            AppConfig(special_hours=[
                {"date": "2024-12-25", "is_open": False},
                {"date": "2024-12-25", "is_open": False},
            ])

    def test_open_day_requires_times(self):
        with pytest.raises(ValidationError, match="Debe especificar horarios"):
            BusinessHourConfig(day_of_week=1, is_open=True)

    def test_rejects_bad_time_format(self):
        with pytest.raises(ValidationError, match="Formato de hora inválido"):
            BusinessHourConfig(day_of_week=1, is_open=True, open_time="9h", close_time="18:00")

    def test_rejects_overnight_hours(self):
        with pytest.raises(ValidationError, match="anterior a la de cierre"):
            BusinessHourConfig(day_of_week=5, is_open=True, open_time="20:00", close_time="02:00")

    def test_open_special_hour_requires_times(self):
        with pytest.raises(ValidationError):
            AppConfig(special_hours=[{"date": "2024-12-24", "is_open": True}])

    @pytest.mark.parametrize(
        "field,value",
        [
            ("default_duration", 10),
            ("default_duration", 500),
            ("buffer_time", 61),
            ("max_advance_booking_days", 0),
            ("min_advance_booking_hours", 200),
        ],
    )
    def test_settings_bounds(self, field, value):
        with pytest.raises(ValidationError):
            AppointmentSettingsConfig(**{field: value})

    def test_closed_day_drops_stray_times(self):
        hour = BusinessHourConfig(day_of_week=0, is_open=False, open_time="09:00", close_time="10:00")

        weekly_hour = hour.to_weekly_hour()

        assert weekly_hour.open_time is None
        assert weekly_hour.close_time is None
