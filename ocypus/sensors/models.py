"""Domain models for temperature readings."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TemperatureReading:
    celsius: float
    source: str
    recording_time: datetime

    def __str__(self) -> str:
        return f"{self.celsius:.1f}°C ({self.source})"
