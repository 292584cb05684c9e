"""HID device session for the numeric display.

DeviceSession is the only owner of the HID handle. It implements a small
state machine::

    DISCONNECTED -> CONNECTING -> CONNECTED -> FAULTED -> DISCONNECTED
                         \\-> DISCONNECTED (open failed)

``send()`` always calls ``ensure_connected()`` first, so every write is
self-healing: after a fault the next call starts a clean open instead of
reusing the broken handle.
"""

import logging
from enum import Enum, auto
from typing import Any, Protocol, Self

from ocypus.lib.config import OCYPUS_L24, DeviceConstants
from ocypus.lib.events import EventKind, EventSink, MonitorEvent, emit
from ocypus.lib.exceptions import (
    DeviceError,
    DeviceNotFoundError,
    DeviceOpenError,
    DeviceWriteError,
)
from ocypus.logging import get_logger

logger = get_logger("device.session")


class DeviceSessionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    FAULTED = auto()


_TRANSITIONS: dict[DeviceSessionState, frozenset[DeviceSessionState]] = {
    DeviceSessionState.DISCONNECTED: frozenset(
        {DeviceSessionState.CONNECTING}
    ),
    DeviceSessionState.CONNECTING: frozenset(
        {DeviceSessionState.CONNECTED, DeviceSessionState.DISCONNECTED}
    ),
    DeviceSessionState.CONNECTED: frozenset(
        {DeviceSessionState.FAULTED, DeviceSessionState.DISCONNECTED}
    ),
    DeviceSessionState.FAULTED: frozenset({DeviceSessionState.DISCONNECTED}),
}


class HidHandle(Protocol):
    """Subset of ``hid.device`` used by the session."""

    def open_path(self, path: bytes) -> None: ...

    def write(self, buff: bytes) -> int: ...

    def close(self) -> None: ...


class HidApi(Protocol):
    """Subset of the ``hid`` module used by the session."""

    def enumerate(
        self, vendor_id: int = 0, product_id: int = 0
    ) -> list[dict[str, Any]]: ...

    def device(self) -> HidHandle: ...


def _default_hid_api() -> HidApi:
    import hid

    return hid  # type: ignore[return-value]


def _format_path(path: bytes | str) -> str:
    if isinstance(path, bytes):
        return path.decode("utf-8", errors="replace")
    return str(path)


class DeviceSession:
    """Connection to one HID display, recovering from unplug and I/O errors."""

    def __init__(
        self,
        hid_api: HidApi | None = None,
        constants: DeviceConstants = OCYPUS_L24,
        *,
        sink: EventSink | None = None,
    ) -> None:
        self._hid = hid_api if hid_api is not None else _default_hid_api()
        self._constants = constants
        self._sink = sink
        self._state = DeviceSessionState.DISCONNECTED
        self._device: HidHandle | None = None
        self._path: str | None = None

    @property
    def state(self) -> DeviceSessionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state == DeviceSessionState.CONNECTED

    @property
    def path(self) -> str | None:
        """Path of the open device, if connected."""
        return self._path

    def _set_state(self, new: DeviceSessionState) -> None:
        if new not in _TRANSITIONS[self._state]:
            raise RuntimeError(
                f"Invalid device transition {self._state.name} -> {new.name}"
            )
        logger.debug("Device state %s -> %s", self._state.name, new.name)
        self._state = new

    def _emit(self, kind: EventKind, level: int, message: str) -> None:
        emit(logger, self._sink, MonitorEvent(kind, level, message))

    def _open(self) -> tuple[HidHandle, str]:
        """Open the first matching device that accepts the connection."""
        vid = self._constants.vendor_id
        pid = self._constants.product_id
        logger.info(
            "Scanning for Ocypus Iota L24 device (%04x:%04x)...", vid, pid
        )

        infos = self._hid.enumerate(vid, pid)
        if not infos:
            raise DeviceNotFoundError()

        failures: list[str] = []
        for info in infos:
            path = info["path"]
            logger.debug("Found device at: %s", _format_path(path))
            device = self._hid.device()
            try:
                device.open_path(path)
            except (OSError, ValueError) as e:
                logger.warning(
                    "Failed to open device at %s: %s", _format_path(path), e
                )
                failures.append(f"{_format_path(path)}: {e}")
                continue
            return device, _format_path(path)

        raise DeviceOpenError(
            "Could not open any matching device (" + "; ".join(failures) + ")"
        )

    def _release(self) -> None:
        """Drop the handle, closing it if still possible."""
        device, self._device, self._path = self._device, None, None
        if device is None:
            return
        try:
            device.close()
        except (OSError, ValueError) as e:
            logger.debug("Ignoring error while closing device: %s", e)

    def ensure_connected(self) -> None:
        """Open the device unless already connected.

        Raises:
            DeviceNotFoundError: No matching device is plugged in.
            DeviceOpenError: A device was found but could not be opened,
                or enumeration itself failed.
        """
        if self._state == DeviceSessionState.CONNECTED:
            return

        self._set_state(DeviceSessionState.CONNECTING)
        try:
            self._device, self._path = self._open()
        except DeviceError:
            self._set_state(DeviceSessionState.DISCONNECTED)
            raise
        except Exception as e:
            # Enumeration or hidapi internals failed; retry from scratch
            self._set_state(DeviceSessionState.DISCONNECTED)
            raise DeviceOpenError(f"Failed to open device: {e!r}") from e

        self._set_state(DeviceSessionState.CONNECTED)
        self._emit(
            EventKind.DEVICE_CONNECTED,
            logging.INFO,
            f"Connected to Ocypus Iota L24 at {self._path}",
        )

    def send(self, report: bytes) -> int:
        """Write one output report, connecting first if needed.

        Returns:
            Number of bytes written.

        Raises:
            DeviceNotFoundError: No device to connect to.
            DeviceOpenError: The device could not be opened.
            DeviceWriteError: The write failed; the session is now
                disconnected and the next call reopens the device.
        """
        self.ensure_connected()
        assert self._device is not None

        try:
            written = self._device.write(report)
        except (OSError, ValueError) as e:
            self._fault(f"Failed to write to device: {e}")
            raise DeviceWriteError(f"Failed to write to device: {e}") from e

        if written < 0:
            self._fault("Failed to write to device: write returned -1")
            raise DeviceWriteError("Failed to write to device")

        if written != len(report):
            logger.warning(
                "Expected to write %d bytes, but wrote %d",
                len(report),
                written,
            )
        else:
            logger.debug("Sent %d bytes to device", written)
        return written

    def _fault(self, reason: str) -> None:
        """Tear the session down after an I/O failure."""
        self._set_state(DeviceSessionState.FAULTED)
        self._emit(EventKind.DEVICE_FAULT, logging.ERROR, reason)
        self._release()
        self._set_state(DeviceSessionState.DISCONNECTED)
        self._emit(
            EventKind.DEVICE_DISCONNECTED,
            logging.WARNING,
            "Device disconnected, will reconnect on next update",
        )

    def disconnect(self) -> None:
        """Close the device handle. No-op when already disconnected."""
        if self._state != DeviceSessionState.CONNECTED:
            return
        self._release()
        self._set_state(DeviceSessionState.DISCONNECTED)
        self._emit(
            EventKind.DEVICE_DISCONNECTED, logging.INFO, "Device closed"
        )

    def reconnect(self) -> None:
        """Drop any open handle and connect from scratch."""
        logger.info("Attempting to reconnect to device...")
        self.disconnect()
        self.ensure_connected()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.disconnect()
