"""Enumerations for the Ocypus digital display monitor."""

from enum import StrEnum


class TemperatureUnit(StrEnum):
    """Unit used for on-device display and threshold comparisons."""

    CELSIUS = "c"
    FAHRENHEIT = "f"

    @property
    def symbol(self) -> str:
        """Return the printable unit symbol (e.g., '°F')."""
        return f"°{self.value.upper()}"


class SensorKind(StrEnum):
    """Which host temperature source to mirror on the display."""

    CPU = "cpu"
    GPU = "gpu"
