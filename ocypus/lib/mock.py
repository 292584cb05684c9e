"""Mock sensor and HID implementations for development.

Provides stand-ins for the sensor tools and the USB display so the monitor
can run without hardware. Used by the monitor service when MOCK_SENSORS=1
is set.
"""

import random
from typing import Any

from ocypus.lib.config import OCYPUS_L24, DeviceConstants
from ocypus.sensors.base import SensorBackend


def _random_walk(
    current: float, drift: float, min_val: float, max_val: float
) -> float:
    """Generate next value using random walk with bounds."""
    change = random.gauss(0, drift)
    new_val = current + change
    return max(min_val, min(max_val, new_val))


class MockSensorBackend(SensorBackend):
    """Sensor backend producing a realistic CPU-like temperature.

    Random walk with drift=0.8, bounds 30-90°C.
    """

    name = "mock"

    def __init__(self, timeout_sec: float = 0.0) -> None:
        super().__init__(timeout_sec)
        self._temperature = random.uniform(40.0, 55.0)

    def read(self) -> float:
        self._temperature = _random_walk(
            self._temperature, drift=0.8, min_val=30.0, max_val=90.0
        )
        return round(self._temperature, 1)


class MockHidDevice:
    """In-memory HID handle that records written reports."""

    def __init__(self, api: "MockHidApi") -> None:
        self._api = api
        self.path: bytes | None = None
        self.closed = False

    def open_path(self, path: bytes) -> None:
        if not self._api.plugged:
            raise OSError("open failed")
        self.path = path

    def write(self, buff: bytes) -> int:
        if self.closed or not self._api.plugged:
            raise OSError("write error")
        self._api.reports.append(bytes(buff))
        return len(buff)

    def close(self) -> None:
        self.closed = True


class MockHidApi:
    """Drop-in for the ``hid`` module exposing one fake display."""

    def __init__(self, constants: DeviceConstants = OCYPUS_L24) -> None:
        self._constants = constants
        self.plugged = True
        self.reports: list[bytes] = []

    def enumerate(
        self, vendor_id: int = 0, product_id: int = 0
    ) -> list[dict[str, Any]]:
        if not self.plugged:
            return []
        if vendor_id not in (0, self._constants.vendor_id):
            return []
        if product_id not in (0, self._constants.product_id):
            return []
        return [
            {
                "path": b"mock:0001",
                "vendor_id": self._constants.vendor_id,
                "product_id": self._constants.product_id,
            }
        ]

    def device(self) -> MockHidDevice:
        return MockHidDevice(self)
