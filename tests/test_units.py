"""Tests for unit conversion and display clamping."""

import pytest

from ocypus.lib.config import TemperatureUnit
from ocypus.lib.units import (
    DisplayValue,
    convert,
    convert_delta,
    round_half_up,
    to_celsius,
    to_display,
    to_fahrenheit,
)


class TestConversion:
    """Tests for Celsius/Fahrenheit conversion."""

    def test_known_points(self):
        assert to_fahrenheit(0.0) == 32.0
        assert to_fahrenheit(100.0) == 212.0
        assert to_fahrenheit(-40.0) == -40.0
        assert to_fahrenheit(30.0) == 86.0
        assert to_celsius(212.0) == 100.0

    @pytest.mark.parametrize("celsius", [-40.0, 0.0, 25.5, 37.2, 86.0, 105.3])
    def test_round_trip(self, celsius):
        result = to_fahrenheit(to_celsius(to_fahrenheit(celsius)))
        assert result == pytest.approx(to_fahrenheit(celsius))
        assert to_celsius(result) == pytest.approx(celsius)

    def test_convert_celsius_is_identity(self):
        assert convert(25.0, TemperatureUnit.CELSIUS) == 25.0

    def test_convert_fahrenheit(self):
        # 25°C = 77°F
        assert convert(25.0, TemperatureUnit.FAHRENHEIT) == pytest.approx(77.0)

    def test_convert_delta(self):
        assert convert_delta(5.0, TemperatureUnit.FAHRENHEIT) == 9.0
        assert convert_delta(5.0, TemperatureUnit.CELSIUS) == 5.0


class TestRoundHalfUp:
    """Tests for whole-degree rounding."""

    def test_halves_round_up(self):
        assert round_half_up(25.5) == 26
        assert round_half_up(24.5) == 25
        assert round_half_up(0.5) == 1

    def test_below_half_rounds_down(self):
        assert round_half_up(25.49) == 25

    def test_negative_halves_round_away_from_zero(self):
        assert round_half_up(-2.5) == -3
        assert round_half_up(-2.4) == -2


class TestToDisplay:
    """Tests for display value conversion and clamping."""

    def test_fahrenheit_whole_degrees(self):
        shown = to_display(30.0, TemperatureUnit.FAHRENHEIT)
        assert shown == DisplayValue(86.0, 86, TemperatureUnit.FAHRENHEIT)
        assert str(shown) == "86°F"

    def test_celsius_rounding(self):
        shown = to_display(45.6, TemperatureUnit.CELSIUS)
        assert shown.digits == 46
        assert shown.value == 45.6
        assert shown.clamped is False

    def test_clamps_above_maximum_keeps_unclamped_value(self):
        shown = to_display(200.0, TemperatureUnit.CELSIUS, maximum=150)
        assert shown.digits == 150
        assert shown.value == 200.0
        assert shown.clamped is True

    def test_clamps_negative_to_minimum(self):
        shown = to_display(-10.0, TemperatureUnit.CELSIUS)
        assert shown.digits == 0
        assert shown.value == -10.0
        assert shown.clamped is True

    def test_default_range_is_three_digits(self):
        shown = to_display(1500.0, TemperatureUnit.CELSIUS)
        assert shown.digits == 999
        assert shown.clamped is True

    def test_boundaries_are_not_clamped(self):
        assert to_display(0.0, TemperatureUnit.CELSIUS).clamped is False
        assert to_display(999.0, TemperatureUnit.CELSIUS).clamped is False
