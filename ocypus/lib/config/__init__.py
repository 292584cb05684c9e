"""Centralized configuration for the Ocypus display monitor.

This package provides:
- Enums for temperature units and sensor kinds
- Frozen device protocol constants
- Pydantic settings models for configuration
"""

from .constants import OCYPUS_L24, SENSOR_TIMEOUT_SEC, DeviceConstants
from .enums import SensorKind, TemperatureUnit
from .settings import (
    MonitorSettings,
    Settings,
    get_settings,
    parse_sensor,
    parse_unit,
)

__all__ = [
    # Enums
    "SensorKind",
    "TemperatureUnit",
    # Constants
    "DeviceConstants",
    "OCYPUS_L24",
    "SENSOR_TIMEOUT_SEC",
    # Settings models
    "MonitorSettings",
    "Settings",
    # Functions
    "get_settings",
    "parse_sensor",
    "parse_unit",
]
