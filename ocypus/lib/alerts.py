"""Alert state tracking for temperature threshold violations.

Provides an AlertTracker that keeps the last-known breach state of one
temperature source and emits a MonitorEvent only on state transitions, so
a persisting condition is reported once.

Optional hysteresis prevents flapping when values oscillate around a
threshold. The tracker is owned by a single monitoring loop and is not
shared between threads.
"""

import logging
from datetime import datetime
from enum import Enum, auto

from ocypus.lib.config import TemperatureUnit
from ocypus.lib.events import EventKind, EventSink, MonitorEvent, emit
from ocypus.logging import get_logger

logger = get_logger("lib.alerts")


class AlertState(Enum):
    """Possible alert states for a temperature source."""

    NORMAL = auto()
    ABOVE_HIGH = auto()
    BELOW_LOW = auto()


class AlertTracker:
    """Tracks the breach state of a reading stream against high/low thresholds.

    Thresholds and values must be expressed in the same unit. A breach
    starts when the value goes strictly above ``high`` or strictly below
    ``low``, and only clears once the value is back inside the band by at
    least ``hysteresis``.
    """

    def __init__(
        self,
        high: float,
        low: float,
        unit: TemperatureUnit,
        *,
        hysteresis: float = 0.0,
        sink: EventSink | None = None,
    ) -> None:
        self.high = high
        self.low = low
        self.unit = unit
        self.hysteresis = hysteresis
        self._sink = sink
        self._state = AlertState.NORMAL

    @property
    def state(self) -> AlertState:
        return self._state

    def _compute_new_state(self, value: float) -> AlertState:
        """Compute the new state from the value and the previous state."""
        if value > self.high:
            return AlertState.ABOVE_HIGH
        if value < self.low:
            return AlertState.BELOW_LOW
        # Inside the band - stay in alert until recovered past hysteresis
        if (
            self._state == AlertState.ABOVE_HIGH
            and value > self.high - self.hysteresis
        ):
            return AlertState.ABOVE_HIGH
        if (
            self._state == AlertState.BELOW_LOW
            and value < self.low + self.hysteresis
        ):
            return AlertState.BELOW_LOW
        return AlertState.NORMAL

    def _handle_transition(
        self,
        new: AlertState,
        value: float,
        recording_time: datetime,
    ) -> None:
        """Emit the event for a state transition."""
        symbol = self.unit.symbol
        if new == AlertState.ABOVE_HIGH:
            kind = EventKind.THRESHOLD_BREACH
            message = (
                f"High temperature alert: {value:.1f}{symbol} "
                f"(threshold: {self.high:.1f}{symbol})"
            )
        elif new == AlertState.BELOW_LOW:
            kind = EventKind.THRESHOLD_BREACH
            message = (
                f"Low temperature alert: {value:.1f}{symbol} "
                f"(threshold: {self.low:.1f}{symbol})"
            )
        else:
            kind = EventKind.THRESHOLD_CLEAR
            message = f"Temperature returned to normal: {value:.1f}{symbol}"

        level = (
            logging.INFO
            if kind == EventKind.THRESHOLD_CLEAR
            else logging.WARNING
        )
        emit(
            logger,
            self._sink,
            MonitorEvent(
                kind=kind,
                level=level,
                message=message,
                value=value,
                recording_time=recording_time,
            ),
        )

    def check(self, value: float, recording_time: datetime) -> AlertState:
        """Check a value and emit an event on a state transition.

        Args:
            value: Converted, unclamped temperature in the tracker's unit.
            recording_time: When the underlying reading was taken.

        Returns:
            The alert state after this value.
        """
        previous = self._state
        new = self._compute_new_state(value)
        self._state = new
        if new != previous:
            self._handle_transition(new, value, recording_time)
        return new

    def reset(self) -> None:
        """Forget the last-known state."""
        self._state = AlertState.NORMAL
