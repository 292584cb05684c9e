"""Custom exceptions for the Ocypus digital display monitor.

Provides a hierarchy of domain-specific exceptions. Sensor and device errors
are recoverable inside the monitoring loop; configuration errors are fatal
at startup.
"""


class OcypusError(Exception):
    """Base exception for all application errors."""


class SensorError(OcypusError):
    """Base exception for sensor backend failures."""

    def __init__(self, backend: str, message: str) -> None:
        super().__init__(f"[{backend}] {message}")
        self.backend = backend


class SensorUnavailableError(SensorError):
    """Raised when a sensor command is missing or exits with an error."""


class SensorTimeoutError(SensorError):
    """Raised when a sensor command does not answer in time."""


class SensorParseError(SensorError):
    """Raised when a sensor answered without a usable numeric value."""


class DeviceError(OcypusError):
    """Base exception for HID display failures."""


class DeviceNotFoundError(DeviceError):
    """Raised when no matching HID device is enumerated."""

    def __init__(
        self, message: str = "No Ocypus Iota L24 device found"
    ) -> None:
        super().__init__(message)


class DeviceOpenError(DeviceError):
    """Raised when the device was enumerated but could not be opened."""


class DeviceWriteError(DeviceError):
    """Raised when writing an output report to the device fails."""


class ConfigurationError(OcypusError):
    """Base exception for invalid configuration."""


class InvalidThresholdsError(ConfigurationError):
    """Raised when the low threshold is not below the high threshold."""


class InvalidUnitError(ConfigurationError):
    """Raised for an unknown temperature unit."""


class InvalidSensorError(ConfigurationError):
    """Raised for an unknown sensor kind."""
