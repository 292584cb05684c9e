"""HID output report encoding for the numeric display.

Report layout (64 bytes)::

    byte 0      report ID (0x07)
    bytes 1-2   0xFF 0xFF
    byte 3      hundreds digit
    byte 4      tens digit
    byte 5      ones digit
    bytes 6-63  zero padding
"""

from ocypus.lib.config import OCYPUS_L24, DeviceConstants


def encode(
    display_value: int, constants: DeviceConstants = OCYPUS_L24
) -> bytes:
    """Build a fresh output report showing ``display_value``.

    Args:
        display_value: Whole degrees, already clamped to the display range.
        constants: Device protocol constants.

    Raises:
        ValueError: If the value is outside the display range.
    """
    if not constants.display_min <= display_value <= constants.display_max:
        raise ValueError(
            f"Display value {display_value} outside "
            f"{constants.display_min}..{constants.display_max}"
        )

    report = bytearray(constants.report_length)
    report[0] = constants.report_id
    report[1 : 1 + len(constants.header)] = constants.header
    report[constants.hundreds_offset] = display_value // 100
    report[constants.tens_offset] = (display_value // 10) % 10
    report[constants.ones_offset] = display_value % 10
    return bytes(report)


def decode_digits(
    report: bytes, constants: DeviceConstants = OCYPUS_L24
) -> int:
    """Read back the number shown by a report built with :func:`encode`."""
    if len(report) != constants.report_length:
        raise ValueError(
            f"Expected a {constants.report_length}-byte report, "
            f"got {len(report)} bytes"
        )
    if report[0] != constants.report_id:
        raise ValueError(f"Unexpected report ID 0x{report[0]:02x}")
    return (
        report[constants.hundreds_offset] * 100
        + report[constants.tens_offset] * 10
        + report[constants.ones_offset]
    )
