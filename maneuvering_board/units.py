#!/usr/bin/env python3
"""
Unit Conversion for the Maneuvering Board

Converts user-facing quantities to the board's internal SI units and back:
- Unit systems (nautical metric/imperial, metric, imperial)
- Speed and length units with their conversion factors
- Parsing of speed, length, time, and angle text fields
- Display strings for speeds, lengths, and durations

Internal units are meters, meters per second, seconds, and radians.
Parse functions never raise on malformed text; they return None so the
caller can re-prompt the user.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Optional, Tuple


# =============================================================================
# CONSTANTS
# =============================================================================

METERS_PER_NAUTICAL_MILE = 1852.0
METERS_PER_MILE = 1609.344
METERS_PER_YARD = 0.9144
METERS_PER_FOOT = 0.3048
SECONDS_PER_HOUR = 3600.0

_NUMBER_PATTERN = re.compile(
    r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(.*?)\s*$"
)
_TIME_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)\s*([hms])", re.IGNORECASE)
_CLOCK_PATTERN = re.compile(r"^(\d+):([0-5]\d)(?::([0-5]\d(?:\.\d*)?))?$")


# =============================================================================
# ENUMS
# =============================================================================

class UnitSystem(Enum):
    """Unit systems a board can display and accept input in."""
    NAUTICAL_METRIC = "nautical_metric"  # knots, nautical miles, meters
    NAUTICAL_IMPERIAL = "nautical_imperial"  # knots, nautical miles, yards
    METRIC = "metric"  # km/h, kilometers, meters
    IMPERIAL = "imperial"  # mph, miles, yards

    @classmethod
    def parse(cls, name: str) -> UnitSystem:
        """
        Look up a unit system by value or member name.

        Args:
            name: e.g. "metric", "NAUTICAL_IMPERIAL", "nautical-metric"

        Returns:
            Matching UnitSystem

        Raises:
            ValueError: If the name matches no unit system
        """
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        for system in cls:
            if system.value == key:
                return system
        raise ValueError(f"Unknown unit system '{name}'")


class SpeedUnit(Enum):
    """Speed units with meters-per-second factor, abbreviation and suffixes."""
    METERS_PER_SECOND = (1.0, "m/s", ("m/s", "mps"))
    KILOMETERS_PER_HOUR = (1000.0 / SECONDS_PER_HOUR, "km/h", ("km/h", "kph", "kmh", "kmph"))
    KNOTS = (METERS_PER_NAUTICAL_MILE / SECONDS_PER_HOUR, "kn", ("kn", "kt", "kts", "knot", "knots"))
    MILES_PER_HOUR = (METERS_PER_MILE / SECONDS_PER_HOUR, "mph", ("mph", "mi/h"))

    def __init__(self, factor: float, abbreviation: str, suffixes: Tuple[str, ...]):
        self.factor = factor
        self.abbreviation = abbreviation
        self.suffixes = suffixes


class LengthUnit(Enum):
    """Length units with meter factor, abbreviation and suffixes."""
    METER = (1.0, "m", ("m", "meter", "meters"))
    KILOMETER = (1000.0, "km", ("km", "kilometer", "kilometers"))
    NAUTICAL_MILE = (METERS_PER_NAUTICAL_MILE, "nm", ("nm", "nmi"))
    MILE = (METERS_PER_MILE, "mi", ("mi", "mile", "miles"))
    YARD = (METERS_PER_YARD, "yd", ("yd", "yds", "yard", "yards"))
    KILOYARD = (METERS_PER_YARD * 1000, "kyd", ("kyd", "kyds"))
    FOOT = (METERS_PER_FOOT, "ft", ("ft", "foot", "feet"))

    def __init__(self, factor: float, abbreviation: str, suffixes: Tuple[str, ...]):
        self.factor = factor
        self.abbreviation = abbreviation
        self.suffixes = suffixes


# Large and small length units used for display, per unit system
_DISPLAY_LENGTH_UNITS = {
    UnitSystem.NAUTICAL_METRIC: (LengthUnit.NAUTICAL_MILE, LengthUnit.METER),
    UnitSystem.NAUTICAL_IMPERIAL: (LengthUnit.NAUTICAL_MILE, LengthUnit.YARD),
    UnitSystem.METRIC: (LengthUnit.KILOMETER, LengthUnit.METER),
    UnitSystem.IMPERIAL: (LengthUnit.MILE, LengthUnit.YARD),
}

_SPEED_UNITS = {
    UnitSystem.NAUTICAL_METRIC: SpeedUnit.KNOTS,
    UnitSystem.NAUTICAL_IMPERIAL: SpeedUnit.KNOTS,
    UnitSystem.METRIC: SpeedUnit.KILOMETERS_PER_HOUR,
    UnitSystem.IMPERIAL: SpeedUnit.MILES_PER_HOUR,
}


# =============================================================================
# CONVERSION
# =============================================================================

def get_appropriate_speed_unit(unit_system: UnitSystem) -> SpeedUnit:
    """Speed unit used for display and unsuffixed input in a unit system."""
    return _SPEED_UNITS[unit_system]


def get_appropriate_length_unit(unit_system: UnitSystem) -> LengthUnit:
    """Length unit used for unsuffixed input in a unit system."""
    return _DISPLAY_LENGTH_UNITS[unit_system][0]


def convert_to_unit(value: float, unit: SpeedUnit | LengthUnit) -> float:
    """Convert an internal SI value into the given unit."""
    return value / unit.factor


def convert_from_unit(value: float, unit: SpeedUnit | LengthUnit) -> float:
    """Convert a value expressed in the given unit into internal SI units."""
    return value * unit.factor


# =============================================================================
# PARSING
# =============================================================================

def _split_number(text: str) -> Optional[Tuple[float, str]]:
    """Split text into a finite number and a lowercase suffix."""
    match = _NUMBER_PATTERN.match(text)
    if not match:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value, match.group(2).lower()


def _find_unit(suffix: str, units) -> Optional[Enum]:
    for unit in units:
        if suffix in unit.suffixes:
            return unit
    return None


def parse_speed(text: str, unit_system: UnitSystem) -> Optional[float]:
    """
    Parse a speed such as "12", "12 kn" or "30km/h".

    Args:
        text: Speed text entered by the user
        unit_system: Supplies the unit when no suffix is given

    Returns:
        Speed in m/s, or None if the text is not a valid non-negative speed
    """
    parts = _split_number(text)
    if parts is None:
        return None
    value, suffix = parts
    if value < 0:
        return None
    if suffix:
        unit = _find_unit(suffix, SpeedUnit)
        if unit is None:
            return None
    else:
        unit = get_appropriate_speed_unit(unit_system)
    return convert_from_unit(value, unit)


def parse_length(text: str, unit_system: UnitSystem) -> Optional[float]:
    """
    Parse a length such as "2", "2 nm" or "500yd".

    Returns:
        Length in meters, or None if the text is not a valid non-negative length
    """
    parts = _split_number(text)
    if parts is None:
        return None
    value, suffix = parts
    if value < 0:
        return None
    if suffix:
        unit = _find_unit(suffix, LengthUnit)
        if unit is None:
            return None
    else:
        unit = get_appropriate_length_unit(unit_system)
    return convert_from_unit(value, unit)


def parse_time(text: str) -> Optional[Tuple[float, bool]]:
    """
    Parse a duration.

    Accepted forms:
    - Clock form "1:30" or "1:30:15" (hours:minutes[:seconds]), not relative
    - Component form "1h 30m", "90m", "45s", "2.5h", relative
    - A bare number, taken as minutes, relative
    - A leading "+" marks any form as relative

    Args:
        text: Time text entered by the user

    Returns:
        (seconds, is_relative), or None if the text is malformed
    """
    body = text.strip()
    relative = False
    if body.startswith("+"):
        relative = True
        body = body[1:].strip()
    if not body:
        return None

    clock = _CLOCK_PATTERN.match(body)
    if clock:
        hours, minutes, seconds = clock.groups()
        total = int(hours) * 3600 + int(minutes) * 60 + float(seconds or 0)
        return total, relative

    parts = _split_number(body)
    if parts is not None and parts[1] == "":
        if parts[0] < 0:
            return None
        return parts[0] * 60, True

    # Component form: every character must belong to a component
    position = 0
    total = 0.0
    seen = set()
    for match in _TIME_COMPONENT_PATTERN.finditer(body):
        if body[position:match.start()].strip():
            return None
        unit = match.group(2).lower()
        if unit in seen:
            return None
        seen.add(unit)
        total += float(match.group(1)) * {"h": 3600, "m": 60, "s": 1}[unit]
        position = match.end()
    if not seen or body[position:].strip():
        return None
    return total, True


def parse_angle(text: str) -> Optional[float]:
    """
    Parse an angle in degrees, e.g. "30" or "-45°".

    Returns:
        Angle in radians, or None if the text is not a number
    """
    parts = _split_number(text)
    if parts is None:
        return None
    value, suffix = parts
    if suffix not in ("", "°", "deg"):
        return None
    return math.radians(value)


# =============================================================================
# FORMATTING
# =============================================================================

def get_rounded_string(value: float, decimals: int = 2) -> str:
    """Format a number with at most `decimals` places and no trailing zeros."""
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def get_speed_string(speed: float, unit_system: UnitSystem) -> str:
    """Format an internal speed, e.g. "13 kn"."""
    unit = get_appropriate_speed_unit(unit_system)
    return f"{get_rounded_string(convert_to_unit(speed, unit))} {unit.abbreviation}"


def get_length_string(length: float, unit_system: UnitSystem) -> str:
    """Format an internal length, dropping to the small unit below one large unit."""
    large, small = _DISPLAY_LENGTH_UNITS[unit_system]
    unit = large if abs(length) >= large.factor else small
    return f"{get_rounded_string(convert_to_unit(length, unit))} {unit.abbreviation}"


def get_time_string(seconds: float) -> str:
    """
    Format a duration: "45s", "12m" or "2h 5m".

    Minutes are rounded to nearest below an hour and rounded up above it.
    """
    secs = int(math.ceil(seconds))
    if secs < 60:
        return f"{secs}s"
    if secs < 3600:
        return f"{(secs + 30) // 60}m"
    minutes = (secs % 3600 + 59) // 60
    return f"{secs // 3600}h {minutes}m"
