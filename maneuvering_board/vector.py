#!/usr/bin/env python3
"""
Plane Geometry for the Maneuvering Board

Implements the 2D primitives shared by every unit on the board:
- Vector2 for both positions and velocities
- Dot/cross products, length, angle and rotation
- Conversion between math angles and compass bearings

The board uses a flat coordinate system where:
- X: east
- Y: north

All units are SI (meters, m/s, radians) unless otherwise specified.
Angles returned by Vector2.angle are math angles (counter-clockwise from
east). Courses and headings shown to the user are bearings (clockwise from
north); use swap_bearing to move between the two.
"""

from __future__ import annotations
import math
from dataclasses import dataclass


TWO_PI = 2 * math.pi


# =============================================================================
# ANGLE HELPERS
# =============================================================================

def normalize_angle(angle_rad: float) -> float:
    """Wrap an angle into [0, 2*pi)."""
    angle = math.fmod(angle_rad, TWO_PI)
    if angle < 0:
        angle += TWO_PI
    # fmod of a tiny negative number can round up to exactly 2*pi
    return 0.0 if angle >= TWO_PI else angle


def swap_bearing(angle_rad: float) -> float:
    """
    Convert a math angle to a compass bearing, or a bearing to a math angle.

    The transform (pi/2 - angle) is its own inverse, so the same function
    works in both directions.

    Args:
        angle_rad: Math angle (CCW from east) or bearing (CW from north)

    Returns:
        The other representation, normalized to [0, 2*pi)
    """
    return normalize_angle(math.pi / 2 - angle_rad)


# =============================================================================
# VECTOR2 CLASS
# =============================================================================

@dataclass(frozen=True, eq=False)
class Vector2:
    """
    2D vector for positions, velocities, and directions on the board.

    Points and vectors share this type; a point is its offset from the
    board origin.
    """
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        """Vector addition."""
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        """Vector subtraction."""
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2:
        """Scalar multiplication."""
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector2:
        """Right scalar multiplication."""
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector2:
        """Scalar division."""
        if scalar == 0:
            raise ValueError("Cannot divide vector by zero")
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2:
        """Negation."""
        return Vector2(-self.x, -self.y)

    def __eq__(self, other: object) -> bool:
        """Equality check with tolerance."""
        if not isinstance(other, Vector2):
            return False
        eps = 1e-10
        return abs(self.x - other.x) < eps and abs(self.y - other.y) < eps

    def dot(self, other: Vector2) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector2) -> float:
        """Z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    @property
    def magnitude(self) -> float:
        """Vector magnitude (length)."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    @property
    def magnitude_squared(self) -> float:
        """Squared magnitude (avoids sqrt for comparisons)."""
        return self.x * self.x + self.y * self.y

    @property
    def angle(self) -> float:
        """Math angle in radians, counter-clockwise from +X."""
        return math.atan2(self.y, self.x)

    @property
    def bearing(self) -> float:
        """Compass bearing in radians, clockwise from +Y."""
        return swap_bearing(self.angle)

    def normalized(self, length: float = 1.0) -> Vector2:
        """Return a vector in the same direction with the given length."""
        mag = self.magnitude
        if mag == 0:
            return Vector2(0.0, 0.0)
        return self * (length / mag)

    def rotated(self, angle_rad: float) -> Vector2:
        """Rotate counter-clockwise by a math angle."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Vector2(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a
        )

    def distance_to(self, other: Vector2) -> float:
        """Distance to another point."""
        return (self - other).magnitude

    def is_zero(self) -> bool:
        """True for the exact zero vector."""
        return self.x == 0 and self.y == 0

    def to_tuple(self) -> tuple[float, float]:
        """Convert to tuple."""
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, t: tuple[float, float]) -> Vector2:
        """Create from tuple."""
        return cls(float(t[0]), float(t[1]))

    @classmethod
    def from_bearing(cls, bearing_rad: float, length: float = 1.0) -> Vector2:
        """Vector of the given length pointing along a compass bearing."""
        return cls(length * math.sin(bearing_rad), length * math.cos(bearing_rad))

    @classmethod
    def zero(cls) -> Vector2:
        """Zero vector."""
        return cls(0.0, 0.0)

    def __repr__(self) -> str:
        return f"Vector2({self.x:.6g}, {self.y:.6g})"
