"""Shared pytest fixtures for the test suite."""

import logging
from datetime import UTC, datetime

import pytest

from ocypus.device.session import DeviceSession
from ocypus.lib.config.testing import override_settings
from ocypus.lib.events import MonitorEvent
from ocypus.lib.mock import MockHidApi
from ocypus.sensors.base import SensorBackend


class ScriptedBackend(SensorBackend):
    """Sensor backend returning a scripted sequence of values or errors.

    The last scripted item repeats once the script is exhausted.
    """

    def __init__(
        self,
        name: str = "scripted",
        values: list[float | Exception] | None = None,
        *,
        available: bool = True,
    ) -> None:
        super().__init__()
        self.name = name
        self._values = list(values) if values is not None else [45.0]
        self.available = available
        self.probe_calls = 0
        self.read_calls = 0

    def probe(self) -> bool:
        self.probe_calls += 1
        return self.available

    def read(self) -> float:
        self.read_calls += 1
        if len(self._values) > 1:
            item = self._values.pop(0)
        else:
            item = self._values[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def configure_caplog(caplog):
    """Ensure caplog captures logs from the ocypus namespace."""
    caplog.set_level(logging.INFO, logger="ocypus")


@pytest.fixture(autouse=True)
def reset_settings():
    """Use default settings, ignoring any local .env file."""
    with override_settings():
        yield


@pytest.fixture
def frozen_time():
    """Return a fixed datetime for deterministic tests."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def hid_api():
    """A fake hid module exposing one plugged-in display."""
    return MockHidApi()


@pytest.fixture
def events():
    """Capture structured events emitted by the core.

    Returns:
        A list populated with MonitorEvent objects as they are emitted.
    """
    return []


@pytest.fixture
def sink(events):
    def capture_event(event: MonitorEvent) -> None:
        events.append(event)

    return capture_event


@pytest.fixture
def session(hid_api, sink):
    """A device session bound to the fake hid module."""
    return DeviceSession(hid_api, sink=sink)
