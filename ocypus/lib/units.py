"""Temperature unit conversion and display clamping."""

import math
from dataclasses import dataclass

from ocypus.lib.config import OCYPUS_L24, TemperatureUnit


@dataclass(frozen=True, slots=True)
class DisplayValue:
    """A reading converted for the display.

    ``value`` is the converted, unclamped temperature used for threshold
    comparisons; ``digits`` is the whole-degree number shown on the device.
    """

    value: float
    digits: int
    unit: TemperatureUnit
    clamped: bool = False

    def __str__(self) -> str:
        return f"{self.digits}{self.unit.symbol}"


def to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32.0) * 5.0 / 9.0


def convert(value_celsius: float, unit: TemperatureUnit) -> float:
    """Convert a Celsius value into the given unit."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return to_fahrenheit(value_celsius)
    return float(value_celsius)


def convert_delta(delta_celsius: float, unit: TemperatureUnit) -> float:
    """Convert a temperature difference (not a point) into the given unit."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return delta_celsius * 9.0 / 5.0
    return float(delta_celsius)


def round_half_up(value: float) -> int:
    """Round to the nearest whole degree, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def to_display(
    value_celsius: float,
    unit: TemperatureUnit,
    minimum: int = OCYPUS_L24.display_min,
    maximum: int = OCYPUS_L24.display_max,
) -> DisplayValue:
    """Convert a Celsius reading into a clamped whole-degree display value.

    Args:
        value_celsius: Raw reading in Celsius.
        unit: Display unit.
        minimum: Lowest whole degree the display can show.
        maximum: Highest whole degree the display can show.

    Returns:
        The converted value, plus the digits to show and whether they had
        to be clamped into ``[minimum, maximum]``.
    """
    value = convert(value_celsius, unit)
    rounded = round_half_up(value)
    digits = max(minimum, min(maximum, rounded))
    return DisplayValue(
        value=value,
        digits=digits,
        unit=unit,
        clamped=digits != rounded,
    )
