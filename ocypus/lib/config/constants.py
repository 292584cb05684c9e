"""Fixed device protocol constants.

These constants are separated to avoid circular imports between settings.py
and the device modules.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeviceConstants:
    """USB identifiers and output report layout of a numeric HID display."""

    vendor_id: int
    product_id: int
    report_id: int
    report_length: int
    header: bytes  # Bytes following the report ID, before the digits
    hundreds_offset: int
    tens_offset: int
    ones_offset: int
    display_min: int
    display_max: int


OCYPUS_L24 = DeviceConstants(
    vendor_id=0x1A2C,
    product_id=0x434D,
    report_id=0x07,
    report_length=64,
    header=b"\xff\xff",
    hundreds_offset=3,
    tens_offset=4,
    ones_offset=5,
    display_min=0,
    display_max=999,
)

# Default subprocess timeout for sensor tools
SENSOR_TIMEOUT_SEC = 2.0
