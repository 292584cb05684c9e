"""Structured monitor events.

Components report sensor failures, device state changes, threshold
transitions and clamping as MonitorEvent objects. Each event is written to
the component logger and handed to an optional sink callable, which lets an
outer collaborator forward alerts elsewhere.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class EventKind(StrEnum):
    """Monitor event types."""

    SENSOR_ERROR = "sensor_error"
    DEVICE_CONNECTED = "device_connected"
    DEVICE_DISCONNECTED = "device_disconnected"
    DEVICE_FAULT = "device_fault"
    THRESHOLD_BREACH = "threshold_breach"
    THRESHOLD_CLEAR = "threshold_clear"
    CLAMPED = "clamped"


@dataclass(frozen=True, slots=True)
class MonitorEvent:
    """A single structured event emitted by the core."""

    kind: EventKind
    level: int
    message: str
    value: float | None = None
    recording_time: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": str(self.kind),
            "level": logging.getLevelName(self.level),
            "message": self.message,
            "value": self.value,
            "recording_time": self.recording_time.strftime(
                "%Y-%m-%d %H:%M:%S"
            ),
        }


type EventSink = Callable[[MonitorEvent], None]


def emit(
    logger: logging.Logger, sink: EventSink | None, event: MonitorEvent
) -> None:
    """Log an event and forward it to the sink, if any."""
    logger.log(event.level, event.message)
    if sink is not None:
        sink(event)
