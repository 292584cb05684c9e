"""Settings models and configuration loading for the Ocypus display monitor."""

from functools import cached_property, lru_cache
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ocypus.lib.config.constants import SENSOR_TIMEOUT_SEC
from ocypus.lib.config.enums import SensorKind, TemperatureUnit
from ocypus.lib.exceptions import (
    InvalidSensorError,
    InvalidThresholdsError,
    InvalidUnitError,
)


def _parse_bool(v: Any) -> bool:
    """Parse boolean from string '1'/'0' or actual bool."""
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


_BoolFromStr = Annotated[bool, BeforeValidator(_parse_bool)]


def parse_unit(raw: str | TemperatureUnit) -> TemperatureUnit:
    """Parse a temperature unit ('c'/'f', any case)."""
    try:
        return TemperatureUnit(str(raw).strip().lower())
    except ValueError:
        raise InvalidUnitError(
            f"Invalid temperature unit: '{raw}'. Use 'c' or 'f'"
        ) from None


def parse_sensor(raw: str | SensorKind) -> SensorKind:
    """Parse a sensor kind ('cpu'/'gpu', any case)."""
    try:
        return SensorKind(str(raw).strip().lower())
    except ValueError:
        raise InvalidSensorError(
            f"Invalid sensor type: '{raw}'. Supported types: cpu, gpu"
        ) from None


class MonitorSettings(BaseModel):
    """Validated configuration record consumed by the monitoring loop.

    Thresholds are always expressed in Celsius.
    """

    model_config = ConfigDict(frozen=True)

    unit: TemperatureUnit = TemperatureUnit.CELSIUS
    interval_sec: int = Field(default=1, gt=0)
    high_threshold: float = 80.0
    low_threshold: float = 20.0
    alerts_enabled: bool = False
    sensor: SensorKind = SensorKind.CPU
    hysteresis: float = Field(default=0.0, ge=0)
    sensor_timeout_sec: float = Field(default=SENSOR_TIMEOUT_SEC, gt=0)

    def check(self) -> "MonitorSettings":
        """Reject threshold combinations that can never be satisfied.

        Raises:
            InvalidThresholdsError: If alerts are enabled and the low
                threshold is not strictly below the high threshold.
        """
        if self.alerts_enabled and self.low_threshold >= self.high_threshold:
            raise InvalidThresholdsError(
                f"LOW_THRESHOLD ({self.low_threshold}) must be less than "
                f"HIGH_THRESHOLD ({self.high_threshold})"
            )
        return self


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Display
    temperature_unit: str = "c"
    update_interval_sec: int = Field(default=1, gt=0)

    # Alerts (Celsius)
    enable_alerts: _BoolFromStr = False
    high_threshold: float = 80.0
    low_threshold: float = 20.0
    alert_hysteresis: float = Field(default=0.0, ge=0)

    # Sensors
    sensor: str = "cpu"
    sensor_timeout_sec: float = Field(default=SENSOR_TIMEOUT_SEC, gt=0)
    mock_sensors: _BoolFromStr = False

    # Logging
    log_level: str = "INFO"

    @cached_property
    def monitor(self) -> MonitorSettings:
        """Get the validated monitor configuration record.

        Raises:
            ConfigurationError: If the unit, sensor or thresholds are invalid.
        """
        return MonitorSettings(
            unit=parse_unit(self.temperature_unit),
            interval_sec=self.update_interval_sec,
            high_threshold=self.high_threshold,
            low_threshold=self.low_threshold,
            alerts_enabled=self.enable_alerts,
            sensor=parse_sensor(self.sensor),
            hysteresis=self.alert_hysteresis,
            sensor_timeout_sec=self.sensor_timeout_sec,
        ).check()


# Settings override for testing - allows injecting custom Settings without
# modifying environment variables or clearing the lru_cache.
_settings_override: Settings | None = None


@lru_cache(maxsize=1)
def _load_settings() -> Settings:
    """Load settings from environment (cached)."""
    return Settings()


def get_settings() -> Settings:
    """Get the global settings instance.

    Returns the test override if set, otherwise loads from environment
    variables (cached after first load). For testing, use set_settings()
    from ocypus.lib.config.testing to override.
    """
    if _settings_override is not None:
        return _settings_override
    return _load_settings()
