"""Mirror a host temperature on the Ocypus Iota L24 display.

Each tick reads the bound sensor backend, converts the value to the
configured display unit, writes the encoded report to the HID display and
evaluates the alert thresholds. Sensor and device failures are logged and
the loop keeps going; only an invalid configuration stops the process.
"""

import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import override

from pydantic import ValidationError

from ocypus.device.report import encode
from ocypus.device.session import DeviceSession
from ocypus.lib.alerts import AlertTracker
from ocypus.lib.config import (
    OCYPUS_L24,
    DeviceConstants,
    MonitorSettings,
    Settings,
    get_settings,
)
from ocypus.lib.events import EventKind, EventSink, MonitorEvent, emit
from ocypus.lib.exceptions import (
    ConfigurationError,
    DeviceError,
    SensorError,
    SensorUnavailableError,
)
from ocypus.lib.polling import PollingService
from ocypus.lib.units import DisplayValue, convert, convert_delta, to_display
from ocypus.logging import configure, get_logger
from ocypus.sensors.base import SensorBackend
from ocypus.sensors.models import TemperatureReading
from ocypus.sensors.resolver import create_backends, resolve_backend

logger = get_logger("monitor.polling")


@dataclass(frozen=True, slots=True)
class MonitorSample:
    """A reading together with its display conversion."""

    reading: TemperatureReading
    display: DisplayValue


class TemperatureMonitorService(PollingService[MonitorSample]):
    """Polling service driving the numeric HID display."""

    def __init__(
        self,
        config: MonitorSettings,
        candidates: Sequence[SensorBackend],
        session: DeviceSession,
        *,
        sink: EventSink | None = None,
        constants: DeviceConstants = OCYPUS_L24,
    ) -> None:
        super().__init__(name="monitor", frequency_sec=config.interval_sec)
        self._config = config
        self._candidates = tuple(candidates)
        self._backend: SensorBackend | None = None
        self._session = session
        self._sink = sink
        self._constants = constants
        self._device_ok = True
        self._last_sample: MonitorSample | None = None

        # Thresholds are configured in Celsius; compare in the display unit
        self._alerts: AlertTracker | None = None
        if config.alerts_enabled:
            unit = config.unit
            self._alerts = AlertTracker(
                high=convert(config.high_threshold, unit),
                low=convert(config.low_threshold, unit),
                unit=unit,
                hysteresis=convert_delta(config.hysteresis, unit),
                sink=sink,
            )

    @property
    def backend(self) -> SensorBackend | None:
        """The sensor backend bound for this run, if resolved yet."""
        return self._backend

    @property
    def alerts(self) -> AlertTracker | None:
        return self._alerts

    @property
    def last_sample(self) -> MonitorSample | None:
        return self._last_sample

    def _emit(
        self,
        kind: EventKind,
        level: int,
        message: str,
        value: float | None = None,
    ) -> None:
        emit(logger, self._sink, MonitorEvent(kind, level, message, value))

    async def _bound_backend(self) -> SensorBackend | None:
        """Resolve the backend once; later ticks reuse the same one."""
        if self._backend is not None:
            return self._backend
        try:
            self._backend = await asyncio.to_thread(
                resolve_backend, self._candidates, self._config.sensor
            )
        except SensorUnavailableError as e:
            self._emit(EventKind.SENSOR_ERROR, logging.WARNING, str(e))
        return self._backend

    @override
    async def initialize(self) -> None:
        """Bind the sensor backend and open the display if present."""
        cfg = self._config
        logger.info("Using temperature unit: %s", cfg.unit.symbol)
        logger.info("Update interval: %d seconds", cfg.interval_sec)
        if cfg.alerts_enabled:
            logger.info(
                "Temperature alerts enabled (high: %.1f°C, low: %.1f°C)",
                cfg.high_threshold,
                cfg.low_threshold,
            )

        await self._bound_backend()
        try:
            await asyncio.to_thread(self._session.ensure_connected)
        except DeviceError as e:
            self._device_ok = False
            logger.warning("Display not available yet: %s", e)

    @override
    async def cleanup(self) -> None:
        """Close the display handle."""
        self._session.disconnect()

    @override
    async def poll(self) -> MonitorSample | None:
        """Read the bound backend and convert the value for display."""
        backend = await self._bound_backend()
        if backend is None:
            return None

        try:
            reading = await asyncio.to_thread(backend.read_temperature)
        except SensorError as e:
            self._emit(
                EventKind.SENSOR_ERROR,
                logging.WARNING,
                f"Failed to get temperature from {backend.name}: {e}",
            )
            return None

        shown = to_display(
            reading.celsius,
            self._config.unit,
            self._constants.display_min,
            self._constants.display_max,
        )
        if shown.clamped:
            self._emit(
                EventKind.CLAMPED,
                logging.WARNING,
                f"Temperature {shown.value:.1f}{shown.unit.symbol} outside "
                f"display range, showing {shown}",
                shown.value,
            )

        logger.info("Temperature: %s (%s)", shown, reading)
        sample = MonitorSample(reading, shown)
        self._last_sample = sample
        return sample

    @override
    async def display(self, reading: MonitorSample) -> None:
        """Send the encoded report; device errors never stop the loop."""
        report = encode(reading.display.digits, self._constants)
        try:
            await asyncio.to_thread(self._session.send, report)
        except DeviceError as e:
            # Log the first failure loudly, then quietly until recovery
            level = logging.WARNING if self._device_ok else logging.DEBUG
            logger.log(level, "Device communication error: %s", e)
            self._device_ok = False
            return

        if not self._device_ok:
            logger.info("Display updates resumed")
        self._device_ok = True

    @override
    async def audit(self, reading: MonitorSample) -> None:
        """Evaluate the unclamped converted value against thresholds."""
        if self._alerts is None:
            return
        self._alerts.check(
            reading.display.value, reading.reading.recording_time
        )


def _create_backends(settings: Settings) -> list[SensorBackend]:
    """Create candidate backends based on configuration."""
    if settings.mock_sensors:
        from ocypus.lib.mock import MockSensorBackend

        logger.info("Using mock sensor backend")
        return [MockSensorBackend()]
    monitor = settings.monitor
    return create_backends(monitor.sensor, monitor.sensor_timeout_sec)


def _create_session(settings: Settings) -> DeviceSession:
    """Create the device session based on configuration."""
    if settings.mock_sensors:
        from ocypus.lib.mock import MockHidApi

        logger.info("Using mock HID display")
        return DeviceSession(MockHidApi())
    return DeviceSession()


def main() -> None:
    """Main entry point for the monitor service."""
    try:
        settings = get_settings()
        config = settings.monitor
    except (ConfigurationError, ValidationError) as e:
        configure()
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    configure(settings.log_level)
    with _create_session(settings) as session:
        service = TemperatureMonitorService(
            config, _create_backends(settings), session
        )
        service.run()


if __name__ == "__main__":
    main()
