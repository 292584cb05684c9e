"""Sensor backend abstraction.

A backend is one concrete way of obtaining a temperature in Celsius, most
often by running an external reporting tool and extracting a number from
its text output. Backends expose a cheap ``probe()`` used once at startup to
pick which backend to bind, and ``read()`` used on every tick.
"""

import os
import re
import subprocess
from abc import ABC, abstractmethod
from datetime import UTC, datetime

from ocypus.lib.config import SENSOR_TIMEOUT_SEC
from ocypus.lib.exceptions import (
    SensorError,
    SensorParseError,
    SensorTimeoutError,
    SensorUnavailableError,
)
from ocypus.logging import get_logger
from ocypus.sensors.models import TemperatureReading

logger = get_logger("sensors")

_NUMBER = re.compile(r"[-+]?\d+(?:\.\d+)?")
# First number directly following a "label:" separator
_LABELLED_NUMBER = re.compile(r":\s*([-+]?\d+(?:\.\d+)?)")


def extract_number(text: str) -> float | None:
    """Return the first decimal value in ``text``, or None."""
    match = _NUMBER.search(text)
    return float(match.group()) if match else None


def extract_labelled_value(line: str) -> float | None:
    """Return the first decimal value right after a colon, or None.

    Skips digits that are part of labels such as ``GPU[0]`` or
    ``amdgpu-pci-0300``.
    """
    match = _LABELLED_NUMBER.search(line)
    return float(match.group(1)) if match else None


def _command_env() -> dict[str, str]:
    """Environment forcing '.' as decimal separator in tool output."""
    env = dict(os.environ)
    env.pop("LC_ALL", None)
    env["LC_NUMERIC"] = "C"
    return env


class SensorBackend(ABC):
    """Abstract temperature source."""

    name: str = "sensor"

    def __init__(self, timeout_sec: float = SENSOR_TIMEOUT_SEC) -> None:
        self.timeout_sec = timeout_sec

    @abstractmethod
    def read(self) -> float:
        """Read the current temperature in Celsius.

        Raises:
            SensorUnavailableError: The source is missing or failed.
            SensorTimeoutError: The source did not answer in time.
            SensorParseError: No numeric value could be extracted.
        """

    def probe(self) -> bool:
        """Check whether this backend can currently produce a reading."""
        try:
            self.read()
        except SensorError as e:
            logger.debug("Probe of %s failed: %s", self.name, e)
            return False
        return True

    def read_temperature(self) -> TemperatureReading:
        """Read the temperature and wrap it with its source and timestamp."""
        return TemperatureReading(
            celsius=self.read(),
            source=self.name,
            recording_time=datetime.now(UTC),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class CommandBackend(SensorBackend):
    """Backend that parses the text output of an external command."""

    command: tuple[str, ...] = ()

    def run(self) -> str:
        """Run the command and return its decoded standard output."""
        try:
            result = subprocess.run(
                list(self.command),
                capture_output=True,
                timeout=self.timeout_sec,
                env=_command_env(),
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise SensorTimeoutError(
                self.name,
                f"{self.command[0]} timed out after {self.timeout_sec}s",
            ) from None
        except OSError as e:
            raise SensorUnavailableError(
                self.name, f"{self.command[0]} not available: {e}"
            ) from e

        if result.returncode != 0:
            raise SensorUnavailableError(
                self.name,
                f"{self.command[0]} exited with status {result.returncode}",
            )
        return result.stdout.decode("utf-8", errors="replace")

    @abstractmethod
    def parse(self, text: str) -> float:
        """Extract a Celsius value from command output.

        Raises:
            SensorParseError: If no value is found.
        """

    def read(self) -> float:
        return self.parse(self.run())

    def _not_found(self, what: str) -> SensorParseError:
        return SensorParseError(
            self.name, f"No {what} found in {self.command[0]} output"
        )
