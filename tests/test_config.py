"""Tests for the configuration module."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from ocypus.lib.config import (
    MonitorSettings,
    SensorKind,
    Settings,
    TemperatureUnit,
    get_settings,
    parse_sensor,
    parse_unit,
)
from ocypus.lib.config.testing import set_settings
from ocypus.lib.exceptions import (
    ConfigurationError,
    InvalidSensorError,
    InvalidThresholdsError,
    InvalidUnitError,
)


class TestParsers:
    """Tests for unit and sensor parsing."""

    def test_parse_unit(self):
        assert parse_unit("c") == TemperatureUnit.CELSIUS
        assert parse_unit("F") == TemperatureUnit.FAHRENHEIT
        assert parse_unit(" f ") == TemperatureUnit.FAHRENHEIT

    def test_parse_unit_invalid(self):
        with pytest.raises(InvalidUnitError, match="Use 'c' or 'f'"):
            parse_unit("kelvin")

    def test_parse_sensor(self):
        assert parse_sensor("cpu") == SensorKind.CPU
        assert parse_sensor("GPU") == SensorKind.GPU

    def test_parse_sensor_invalid(self):
        with pytest.raises(InvalidSensorError, match="cpu, gpu"):
            parse_sensor("disk")

    def test_unit_symbols(self):
        assert TemperatureUnit.CELSIUS.symbol == "°C"
        assert TemperatureUnit.FAHRENHEIT.symbol == "°F"


class TestMonitorSettings:
    """Tests for the validated monitor record."""

    def test_default_values(self):
        config = MonitorSettings()

        assert config.unit == TemperatureUnit.CELSIUS
        assert config.interval_sec == 1
        assert config.high_threshold == 80.0
        assert config.low_threshold == 20.0
        assert config.alerts_enabled is False
        assert config.sensor == SensorKind.CPU
        assert config.hysteresis == 0.0

    def test_inverted_thresholds_rejected_when_alerts_enabled(self):
        config = MonitorSettings(
            alerts_enabled=True, high_threshold=50.0, low_threshold=50.0
        )
        with pytest.raises(InvalidThresholdsError):
            config.check()

    def test_inverted_thresholds_ignored_when_alerts_disabled(self):
        config = MonitorSettings(high_threshold=10.0, low_threshold=50.0)
        assert config.check() is config

    @pytest.mark.parametrize("interval", [0, -1])
    def test_interval_must_be_positive(self, interval):
        with pytest.raises(ValidationError):
            MonitorSettings(interval_sec=interval)

    def test_is_frozen(self):
        config = MonitorSettings()
        with pytest.raises(ValidationError):
            config.unit = TemperatureUnit.FAHRENHEIT


class TestSettings:
    """Tests for loading settings from the environment."""

    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.temperature_unit == "c"
        assert settings.update_interval_sec == 1
        assert settings.enable_alerts is False
        assert settings.sensor == "cpu"
        assert settings.mock_sensors is False
        assert settings.log_level == "INFO"

    @patch.dict(
        "os.environ",
        {
            "TEMPERATURE_UNIT": "F",
            "UPDATE_INTERVAL_SEC": "5",
            "ENABLE_ALERTS": "1",
            "HIGH_THRESHOLD": "75.5",
            "LOW_THRESHOLD": "15",
            "ALERT_HYSTERESIS": "2",
            "SENSOR": "gpu",
            "SENSOR_TIMEOUT_SEC": "4",
        },
    )
    def test_monitor_from_environment(self):
        config = Settings(_env_file=None).monitor

        assert config.unit == TemperatureUnit.FAHRENHEIT
        assert config.interval_sec == 5
        assert config.alerts_enabled is True
        assert config.high_threshold == 75.5
        assert config.low_threshold == 15.0
        assert config.hysteresis == 2.0
        assert config.sensor == SensorKind.GPU
        assert config.sensor_timeout_sec == 4.0

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("1", True),
            ("true", True),
            ("yes", True),
            ("0", False),
            ("", False),
        ],
    )
    def test_bool_parsing(self, raw, expected):
        with patch.dict("os.environ", {"ENABLE_ALERTS": raw}):
            assert Settings(_env_file=None).enable_alerts is expected

    @patch.dict("os.environ", {"TEMPERATURE_UNIT": "x"})
    def test_invalid_unit(self):
        with pytest.raises(InvalidUnitError):
            Settings(_env_file=None).monitor

    @patch.dict("os.environ", {"SENSOR": "tpu"})
    def test_invalid_sensor(self):
        with pytest.raises(ConfigurationError):
            Settings(_env_file=None).monitor

    @patch.dict(
        "os.environ",
        {"ENABLE_ALERTS": "1", "HIGH_THRESHOLD": "20", "LOW_THRESHOLD": "30"},
    )
    def test_invalid_thresholds(self):
        with pytest.raises(InvalidThresholdsError, match="LOW_THRESHOLD"):
            Settings(_env_file=None).monitor

    @patch.dict("os.environ", {"UPDATE_INTERVAL_SEC": "0"})
    def test_zero_interval(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


class TestGetSettings:
    """Tests for the settings override used in tests."""

    def test_override(self):
        custom = Settings(_env_file=None, sensor="gpu")
        set_settings(custom)
        assert get_settings() is custom

    def test_cleared_override_loads_environment(self):
        set_settings(None)
        with patch.dict("os.environ", {"SENSOR": "gpu"}):
            assert get_settings().sensor == "gpu"
