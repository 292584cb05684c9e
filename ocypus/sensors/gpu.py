"""GPU temperature from vendor tools, with lm-sensors as a generic fallback."""

from typing import override

from ocypus.sensors.base import (
    CommandBackend,
    extract_labelled_value,
    extract_number,
)


class NvidiaSmiBackend(CommandBackend):
    """NVIDIA GPU core temperature."""

    name = "nvidia-smi"
    command = (
        "nvidia-smi",
        "--query-gpu=temperature.gpu",
        "--format=csv,noheader,nounits",
    )

    @override
    def parse(self, text: str) -> float:
        # One line per GPU; mirror the first one
        for line in text.splitlines():
            if line.strip():
                value = extract_number(line)
                if value is not None:
                    return value
                break
        raise self._not_found("GPU temperature")


class AmdSmiBackend(CommandBackend):
    """AMD GPU edge temperature (ROCm 6+ ``amd-smi``)."""

    name = "amd-smi"
    command = ("amd-smi", "metric", "--temperature")

    @override
    def parse(self, text: str) -> float:
        for line in text.splitlines():
            if "edge" in line.lower():
                value = extract_labelled_value(line)
                if value is not None:
                    return value
        raise self._not_found("edge temperature")


class RocmSmiBackend(CommandBackend):
    """AMD GPU temperature (legacy ``rocm-smi``)."""

    name = "rocm-smi"
    command = ("rocm-smi", "--showtemp")

    @override
    def parse(self, text: str) -> float:
        for line in text.splitlines():
            if "temperature" in line.lower():
                value = extract_labelled_value(line)
                if value is not None:
                    return value
        raise self._not_found("temperature")


class LmSensorsGpuBackend(CommandBackend):
    """GPU temperature as exposed by any lm-sensors chip."""

    name = "lm-sensors-gpu"
    command = ("sensors",)

    _KEYWORDS = ("gpu", "edge", "junction")

    @override
    def parse(self, text: str) -> float:
        for line in text.splitlines():
            lower = line.lower()
            if any(k in lower for k in self._KEYWORDS):
                value = extract_labelled_value(line)
                if value is not None:
                    return value
        raise self._not_found("GPU temperature")
