#!/usr/bin/env python3
"""
Test Suite for Unit Conversion

Tests cover:
1. Unit systems and their appropriate units
2. Conversion to and from internal SI units
3. Parsing of speed, length, time, and angle text
4. Display formatting of numbers, speeds, lengths, and durations
"""

import math
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from maneuvering_board.units import (
    UnitSystem,
    SpeedUnit,
    LengthUnit,
    get_appropriate_speed_unit,
    get_appropriate_length_unit,
    convert_to_unit,
    convert_from_unit,
    parse_speed,
    parse_length,
    parse_time,
    parse_angle,
    get_rounded_string,
    get_speed_string,
    get_length_string,
    get_time_string,
)


KNOT_MPS = 1852 / 3600


# =============================================================================
# UNIT SYSTEMS
# =============================================================================

class TestUnitSystems:
    """Tests for unit system lookup."""

    @pytest.mark.parametrize("system,speed_unit,length_unit", [
        (UnitSystem.NAUTICAL_METRIC, SpeedUnit.KNOTS, LengthUnit.NAUTICAL_MILE),
        (UnitSystem.NAUTICAL_IMPERIAL, SpeedUnit.KNOTS, LengthUnit.NAUTICAL_MILE),
        (UnitSystem.METRIC, SpeedUnit.KILOMETERS_PER_HOUR, LengthUnit.KILOMETER),
        (UnitSystem.IMPERIAL, SpeedUnit.MILES_PER_HOUR, LengthUnit.MILE),
    ])
    def test_appropriate_units(self, system, speed_unit, length_unit):
        assert get_appropriate_speed_unit(system) is speed_unit
        assert get_appropriate_length_unit(system) is length_unit

    @pytest.mark.parametrize("name,expected", [
        ("metric", UnitSystem.METRIC),
        ("Imperial", UnitSystem.IMPERIAL),
        ("NAUTICAL_METRIC", UnitSystem.NAUTICAL_METRIC),
        ("nautical-imperial", UnitSystem.NAUTICAL_IMPERIAL),
    ])
    def test_parse_unit_system(self, name, expected):
        assert UnitSystem.parse(name) is expected

    def test_parse_unknown_unit_system_raises(self):
        with pytest.raises(ValueError):
            UnitSystem.parse("furlongs")


class TestConversion:
    """Tests for SI conversion."""

    def test_knots_to_mps(self):
        assert convert_from_unit(10, SpeedUnit.KNOTS) == pytest.approx(10 * KNOT_MPS)

    def test_mps_to_kph(self):
        assert convert_to_unit(10, SpeedUnit.KILOMETERS_PER_HOUR) == pytest.approx(36.0)

    def test_nautical_mile(self):
        assert convert_from_unit(2, LengthUnit.NAUTICAL_MILE) == pytest.approx(3704.0)

    @pytest.mark.parametrize("unit", list(SpeedUnit) + list(LengthUnit))
    def test_round_trip(self, unit):
        assert convert_to_unit(convert_from_unit(7.25, unit), unit) == pytest.approx(7.25)


# =============================================================================
# PARSING
# =============================================================================

class TestParseSpeed:
    """Tests for speed text parsing."""

    def test_unsuffixed_uses_system_unit(self):
        assert parse_speed("13", UnitSystem.NAUTICAL_METRIC) == pytest.approx(13 * KNOT_MPS)
        assert parse_speed("36", UnitSystem.METRIC) == pytest.approx(10.0)

    @pytest.mark.parametrize("text,expected", [
        ("10 kn", 10 * KNOT_MPS),
        ("10kts", 10 * KNOT_MPS),
        ("36 km/h", 10.0),
        ("36KPH", 10.0),
        ("5 m/s", 5.0),
        ("60 mph", 60 * 1609.344 / 3600),
        ("  7.5  ", 7.5 * KNOT_MPS),
    ])
    def test_suffixes(self, text, expected):
        assert parse_speed(text, UnitSystem.NAUTICAL_METRIC) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "fast", "-3", "12 furlongs", "kn", "1e999"])
    def test_invalid_returns_none(self, text):
        assert parse_speed(text, UnitSystem.NAUTICAL_METRIC) is None


class TestParseLength:
    """Tests for length text parsing."""

    def test_unsuffixed_uses_system_unit(self):
        assert parse_length("2", UnitSystem.NAUTICAL_IMPERIAL) == pytest.approx(3704.0)
        assert parse_length("2", UnitSystem.METRIC) == pytest.approx(2000.0)

    @pytest.mark.parametrize("text,expected", [
        ("500 yd", 457.2),
        ("1.5km", 1500.0),
        ("2 kyd", 1828.8),
        ("100 ft", 30.48),
        ("0", 0.0),
    ])
    def test_suffixes(self, text, expected):
        assert parse_length(text, UnitSystem.NAUTICAL_METRIC) == pytest.approx(expected)

    @pytest.mark.parametrize("text", ["", "far", "-1 nm", "3 parsecs"])
    def test_invalid_returns_none(self, text):
        assert parse_length(text, UnitSystem.NAUTICAL_METRIC) is None


class TestParseTime:
    """Tests for time text parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("1:30", (5400.0, False)),
        ("0:45:30", (2730.0, False)),
        ("+1:30", (5400.0, True)),
        ("1h 30m", (5400.0, True)),
        ("1h30m", (5400.0, True)),
        ("90m", (5400.0, True)),
        ("45s", (45.0, True)),
        ("2.5h", (9000.0, True)),
        ("10", (600.0, True)),
        ("1H 2M 3S", (3723.0, True)),
    ])
    def test_valid(self, text, expected):
        seconds, relative = parse_time(text)
        assert seconds == pytest.approx(expected[0])
        assert relative is expected[1]

    @pytest.mark.parametrize("text", ["", "+", "soon", "1:75", "1h 1h", "1h x", "-5m", "1:5"])
    def test_invalid_returns_none(self, text):
        assert parse_time(text) is None


class TestParseAngle:
    """Tests for angle text parsing."""

    @pytest.mark.parametrize("text,degrees", [
        ("30", 30.0),
        ("-45°", -45.0),
        ("90 deg", 90.0),
        ("0", 0.0),
    ])
    def test_valid(self, text, degrees):
        assert parse_angle(text) == pytest.approx(math.radians(degrees))

    @pytest.mark.parametrize("text", ["", "port", "30 mils"])
    def test_invalid_returns_none(self, text):
        assert parse_angle(text) is None


# =============================================================================
# FORMATTING
# =============================================================================

class TestFormatting:
    """Tests for display strings."""

    @pytest.mark.parametrize("value,expected", [
        (13.0, "13"),
        (67.38013505, "67.38"),
        (2.5, "2.5"),
        (-0.001, "0"),
        (100.0, "100"),
    ])
    def test_rounded_string(self, value, expected):
        assert get_rounded_string(value) == expected

    def test_speed_string(self):
        assert get_speed_string(13 * KNOT_MPS, UnitSystem.NAUTICAL_METRIC) == "13 kn"
        assert get_speed_string(10.0, UnitSystem.METRIC) == "36 km/h"

    def test_length_string_switches_units(self):
        assert get_length_string(3704.0, UnitSystem.NAUTICAL_METRIC) == "2 nm"
        assert get_length_string(500.0, UnitSystem.NAUTICAL_METRIC) == "500 m"
        assert get_length_string(457.2, UnitSystem.IMPERIAL) == "500 yd"

    @pytest.mark.parametrize("seconds,expected", [
        (0.4, "1s"),
        (45, "45s"),
        (59.2, "1m"),
        (89, "1m"),
        (90, "2m"),
        (3000, "50m"),
        (3600, "1h 0m"),
        (3661, "1h 2m"),
        (7200, "2h 0m"),
    ])
    def test_time_string(self, seconds, expected):
        assert get_time_string(seconds) == expected
