"""CPU temperature from lm-sensors output."""

import re
from typing import override

from ocypus.sensors.base import CommandBackend

# Tried in order; the first label present wins
_CPU_PATTERNS = (
    re.compile(r"Package id 0:\s*([-+]?\d+(?:\.\d+)?)"),  # Intel
    re.compile(r"Tdie:\s*([-+]?\d+(?:\.\d+)?)"),  # AMD real die temp
    re.compile(r"Tctl:\s*([-+]?\d+(?:\.\d+)?)"),  # AMD control temp
    re.compile(r"temp1:\s*([-+]?\d+(?:\.\d+)?)"),  # generic fallback
)


class LmSensorsCpuBackend(CommandBackend):
    """CPU package temperature reported by the ``sensors`` command."""

    name = "lm-sensors"
    command = ("sensors",)

    @override
    def parse(self, text: str) -> float:
        for pattern in _CPU_PATTERNS:
            match = pattern.search(text)
            if match:
                return float(match.group(1))
        raise self._not_found("CPU temperature")
