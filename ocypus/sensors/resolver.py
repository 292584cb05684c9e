"""Backend selection for each sensor kind."""

from collections.abc import Sequence

from ocypus.lib.config import SENSOR_TIMEOUT_SEC, SensorKind
from ocypus.lib.exceptions import SensorUnavailableError
from ocypus.logging import get_logger
from ocypus.sensors.base import SensorBackend
from ocypus.sensors.cpu import LmSensorsCpuBackend
from ocypus.sensors.gpu import (
    AmdSmiBackend,
    LmSensorsGpuBackend,
    NvidiaSmiBackend,
    RocmSmiBackend,
)

logger = get_logger("sensors.resolver")

# Priority order, most specific tool first
BACKEND_CLASSES: dict[SensorKind, tuple[type[SensorBackend], ...]] = {
    SensorKind.CPU: (LmSensorsCpuBackend,),
    SensorKind.GPU: (
        NvidiaSmiBackend,
        AmdSmiBackend,
        RocmSmiBackend,
        LmSensorsGpuBackend,
    ),
}


def create_backends(
    kind: SensorKind, timeout_sec: float = SENSOR_TIMEOUT_SEC
) -> list[SensorBackend]:
    """Instantiate the candidate backends for a kind, in priority order."""
    return [cls(timeout_sec) for cls in BACKEND_CLASSES[kind]]


def resolve_backend(
    candidates: Sequence[SensorBackend], kind: SensorKind | str = "sensor"
) -> SensorBackend:
    """Return the first candidate whose probe succeeds.

    Args:
        candidates: Backends in priority order.
        kind: Label used in log and error messages.

    Raises:
        SensorUnavailableError: If no candidate is available.
    """
    for backend in candidates:
        if backend.probe():
            logger.info(
                "Using %s backend for %s temperature", backend.name, kind
            )
            return backend
        logger.debug("%s backend not available", backend.name)

    tried = ", ".join(b.name for b in candidates) or "none"
    raise SensorUnavailableError(
        str(kind), f"No available {kind} temperature backend (tried: {tried})"
    )
