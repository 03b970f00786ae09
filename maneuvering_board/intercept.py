#!/usr/bin/env python3
"""
Intercept Solver for the Maneuvering Board

Computes the course and speed a unit must steer to intercept a target
moving at constant velocity:
- Target point resolution (the target itself, or a point on a stand-off
  circle given by angle-on-bow and radius)
- Constraint validation and degenerate cases (already there, stationary target)
- Exact time of intercept for a fixed speed (quadratic formula)
- Numerical minimum intercept speed when neither speed nor time is given

If the unit is at P and the target is at T with velocity V, the intercept
point is T + V*t. With O = T - P, a unit steering at speed s reaches it when
s*t = |O + V*t|. Squaring and collecting terms gives
(|V|^2 - s^2)*t^2 + 2*(O.V)*t + |O|^2 = 0, which is solved exactly once the
speed is known. With no speed or time given, s(t) = |O + V*t| / t is
minimized numerically instead.

The solver is a pure function of its inputs. Failures are returned as
InterceptResult objects, never raised to the caller.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np
from scipy.optimize import minimize

from .config import SolverConfig
from .units import (
    convert_from_unit,
    convert_to_unit,
    get_appropriate_speed_unit,
    get_rounded_string,
    get_speed_string,
    get_time_string,
)
from .vector import Vector2


LOGGER = logging.getLogger(__name__)

# Evaluating s(t) at t = 0 divides by zero; the minimizer sees this floor instead
MIN_EVALUATION_TIME_S = 1e-9


# =============================================================================
# ERRORS
# =============================================================================

class InterceptError(Enum):
    """Reasons an intercept solution could not be produced."""
    INVALID_INPUT = "invalid_input"
    CONFLICTING_CONSTRAINTS = "conflicting_constraints"
    INCOMPLETE_CIRCLE_CONSTRAINT = "incomplete_circle_constraint"
    ALREADY_ARRIVED = "already_arrived"
    NO_INTERCEPT = "no_intercept"
    NO_STABLE_MINIMUM = "no_stable_minimum"


DEFAULT_MESSAGES = {
    InterceptError.INVALID_INPUT: "Invalid data.",
    InterceptError.CONFLICTING_CONSTRAINTS: "Remove speed or time.",
    InterceptError.INCOMPLETE_CIRCLE_CONSTRAINT: "Using AoB requires a radius.",
    InterceptError.ALREADY_ARRIVED: "You are already there.",
    InterceptError.NO_INTERCEPT: "No intercept is possible.",
    InterceptError.NO_STABLE_MINIMUM: "Try setting parameters.",
}


class InterceptFailure(Exception):
    """Raised by a solver stage; converted to an InterceptResult by solve_intercept."""

    def __init__(self, error: InterceptError, message: Optional[str] = None):
        self.error = error
        self.message = message or DEFAULT_MESSAGES[error]
        super().__init__(self.message)


# =============================================================================
# DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class TargetState:
    """
    Kinematic state of the unit being intercepted.

    Attributes:
        position: Target position on the board (meters)
        velocity: Target velocity (m/s), may be the zero vector
        direction: Configured heading (bearing, radians) used when stationary
    """
    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2.zero)
    direction: float = 0.0

    @property
    def is_stationary(self) -> bool:
        """True if the target has no velocity."""
        return self.velocity.is_zero()

    @property
    def heading(self) -> float:
        """Bearing of travel, or the configured direction when stationary."""
        if self.is_stationary:
            return self.direction
        return self.velocity.bearing


@dataclass(frozen=True)
class InterceptConstraints:
    """
    Optional constraints on the intercept.

    Attributes:
        speed: Desired intercept speed (m/s)
        time: Desired time to intercept (seconds)
        angle_on_bow: Bearing of the intercept point relative to the
            target's heading (radians), requires radius
        radius: Stand-off distance from the target (meters), requires
            angle_on_bow. Zero is treated as absent.
    """
    speed: Optional[float] = None
    time: Optional[float] = None
    angle_on_bow: Optional[float] = None
    radius: Optional[float] = None

    @property
    def effective_radius(self) -> Optional[float]:
        """Radius with zero treated as absent."""
        if self.radius is None or self.radius == 0:
            return None
        return self.radius


@dataclass(frozen=True)
class InterceptSolution:
    """
    Course and speed that intercept the target.

    Attributes:
        velocity: Velocity the interceptor must steer (m/s)
        intercept_point: Where the interceptor meets the target point (meters)
        time_s: Time until intercept (seconds)
        target_stationary: True if the speed is the canned stationary default
    """
    velocity: Vector2
    intercept_point: Vector2
    time_s: float
    target_stationary: bool = False

    @property
    def speed(self) -> float:
        """Intercept speed in m/s."""
        return self.velocity.magnitude

    @property
    def course(self) -> float:
        """Course to steer as a bearing in radians."""
        return self.velocity.bearing

    @property
    def course_deg(self) -> float:
        """Course to steer as a bearing in degrees."""
        return math.degrees(self.course)


@dataclass(frozen=True)
class InterceptResult:
    """
    Outcome of a solve: a solution or a typed failure, plus a status line.

    Attributes:
        solution: The intercept solution, None on failure
        error: Failure kind, None on success
        message: One-line status suitable for display
    """
    solution: Optional[InterceptSolution] = None
    error: Optional[InterceptError] = None
    message: str = ""

    @property
    def success(self) -> bool:
        """Returns True if a solution was found."""
        return self.solution is not None

    @classmethod
    def failed(cls, failure: InterceptFailure) -> InterceptResult:
        """Wrap a stage failure."""
        return cls(solution=None, error=failure.error, message=failure.message)


# =============================================================================
# TARGET POINT AND VALIDATION
# =============================================================================

def resolve_target_point(
    target: TargetState,
    angle_on_bow: Optional[float] = None,
    radius: Optional[float] = None
) -> Vector2:
    """
    Find the single point the interceptor should head for.

    With angle-on-bow and radius the target point is on the stand-off
    circle: due north rotated clockwise by heading + AoB, scaled to radius.

    Args:
        target: Target state
        angle_on_bow: Relative bearing from the target's heading (radians)
        radius: Stand-off radius (meters)

    Returns:
        The effective target point
    """
    if radius is None or angle_on_bow is None:
        return target.position
    offset = Vector2(0.0, radius).rotated(-(target.heading + angle_on_bow))
    return target.position + offset


def check_constraints(constraints: InterceptConstraints) -> None:
    """
    Validate a constraint set before solving.

    Raises:
        InterceptFailure: CONFLICTING_CONSTRAINTS if speed and time are both
            set, INCOMPLETE_CIRCLE_CONSTRAINT if only one of AoB/radius is
            set, INVALID_INPUT for non-finite, negative speed or non-positive time
    """
    radius = constraints.effective_radius

    if constraints.speed is not None and constraints.time is not None:
        raise InterceptFailure(InterceptError.CONFLICTING_CONSTRAINTS)
    if constraints.angle_on_bow is not None and radius is None:
        raise InterceptFailure(InterceptError.INCOMPLETE_CIRCLE_CONSTRAINT)
    if radius is not None and constraints.angle_on_bow is None:
        raise InterceptFailure(InterceptError.INCOMPLETE_CIRCLE_CONSTRAINT,
                               "Using a radius requires AoB.")

    for name in ("speed", "time", "angle_on_bow", "radius"):
        value = getattr(constraints, name)
        if value is not None and not math.isfinite(value):
            raise InterceptFailure(InterceptError.INVALID_INPUT,
                                   f"The {name.replace('_', ' ')} must be a finite number.")
    if constraints.speed is not None and constraints.speed < 0:
        raise InterceptFailure(InterceptError.INVALID_INPUT, "Speed cannot be negative.")
    if constraints.time is not None and constraints.time <= 0:
        raise InterceptFailure(InterceptError.INVALID_INPUT, "Intercept time must be positive.")


def stationary_speed(config: SolverConfig) -> float:
    """Canned speed (m/s) used to head for a stationary target."""
    unit = get_appropriate_speed_unit(config.unit_system)
    return convert_from_unit(config.stationary_speed, unit)


def check_degenerate(
    interceptor: Vector2,
    target: TargetState,
    target_point: Vector2,
    constraints: InterceptConstraints,
    config: SolverConfig
) -> Optional[InterceptSolution]:
    """
    Handle the cases that need no solving.

    Returns:
        A canned solution for a stationary target, otherwise None

    Raises:
        InterceptFailure: ALREADY_ARRIVED if the interceptor is already at
            the target point (or inside a radius given without AoB)
    """
    offset = target_point - interceptor
    radius = constraints.effective_radius
    if radius is not None and constraints.angle_on_bow is None:
        threshold = radius * radius
    else:
        threshold = 0.0
    if offset.magnitude_squared <= threshold:
        raise InterceptFailure(InterceptError.ALREADY_ARRIVED)

    # Any speed reaches a stationary target; pick a nominal one
    if target.is_stationary:
        speed = stationary_speed(config)
        return InterceptSolution(
            velocity=offset.normalized(speed),
            intercept_point=target_point,
            time_s=offset.magnitude / speed,
            target_stationary=True
        )
    return None


# =============================================================================
# ANALYTIC SOLVER
# =============================================================================

def solve_intercept_time(offset: Vector2, target_velocity: Vector2, speed: float) -> float:
    """
    Solve for the earliest time an interceptor at a fixed speed meets the target.

    Uses A*t^2 + 2*B*t + C = 0 with A = |V|^2 - s^2, B = O.V, C = |O|^2. The
    factor of two is cancelled in the quadratic formula, so the roots are
    (-B +/- sqrt(B^2 - A*C)) / A.

    Args:
        offset: Target point relative to the interceptor (meters)
        target_velocity: Target velocity (m/s)
        speed: Interceptor speed (m/s)

    Returns:
        Smallest non-negative intercept time (seconds)

    Raises:
        InterceptFailure: NO_INTERCEPT if no non-negative root exists
    """
    a = target_velocity.magnitude_squared - speed * speed
    b = offset.dot(target_velocity)
    c = offset.magnitude_squared
    LOGGER.debug("Intercept quadratic A=%r B=%r C=%r", a, b, c)

    if a == 0:
        # Equal speeds: linear equation 2*B*t + C = 0
        if b == 0:
            raise InterceptFailure(InterceptError.NO_INTERCEPT)
        time_s = -c / (2 * b)
        if time_s < 0:
            raise InterceptFailure(InterceptError.NO_INTERCEPT)
        return time_s

    discriminant = b * b - a * c
    if discriminant < 0:
        raise InterceptFailure(InterceptError.NO_INTERCEPT)
    root = math.sqrt(discriminant)
    time1 = (-b + root) / a
    time2 = (-b - root) / a
    if 0 <= time1 <= time2:
        return time1
    if time2 >= 0:
        return time2
    raise InterceptFailure(InterceptError.NO_INTERCEPT)


def build_solution(
    offset: Vector2,
    target_point: Vector2,
    target_velocity: Vector2,
    time_s: float
) -> InterceptSolution:
    """
    Turn a known intercept time into a velocity and intercept point.

    The intercept vector is O + V*t; dividing by t gives the velocity O/t + V.
    """
    return InterceptSolution(
        velocity=offset / time_s + target_velocity,
        intercept_point=target_point + target_velocity * time_s,
        time_s=time_s
    )


# =============================================================================
# NUMERICAL MINIMUM SPEED
# =============================================================================

def find_minimum_speed(
    offset: Vector2,
    target_velocity: Vector2,
    config: Optional[SolverConfig] = None
) -> float:
    """
    Numerically find the lowest speed that intercepts the target.

    Minimizes s(t) = |O + V*t| / t over t >= 0 with L-BFGS-B, using the
    analytic derivative s'(t) = -(O.(O + V*t)) / (t^2 * |O + V*t|). The
    working variable is time in config.time_scale_s units so it stays near 1.

    Args:
        offset: Target point relative to the interceptor (meters)
        target_velocity: Target velocity (m/s)
        config: Solver configuration

    Returns:
        Minimum intercept speed (m/s)

    Raises:
        InterceptFailure: NO_STABLE_MINIMUM if the minimizer does not converge
    """
    config = config or SolverConfig()
    scale = config.time_scale_s
    ox, oy = offset.x, offset.y
    vx, vy = target_velocity.x, target_velocity.y

    def speed_at(x: np.ndarray) -> float:
        t = max(float(x[0]) * scale, MIN_EVALUATION_TIME_S)
        px, py = ox + vx * t, oy + vy * t
        return math.sqrt(px * px + py * py) / t

    def speed_gradient(x: np.ndarray) -> np.ndarray:
        t = max(float(x[0]) * scale, MIN_EVALUATION_TIME_S)
        px, py = ox + vx * t, oy + vy * t
        distance = math.sqrt(px * px + py * py)
        if distance == 0:
            # Target passes through the interceptor: s(t) = 0 is the minimum
            return np.zeros(1)
        derivative = -(ox * px + oy * py) / (t * t * distance)
        return np.array([derivative * scale])

    result = minimize(
        speed_at,
        np.array([config.initial_guess]),
        jac=speed_gradient,
        method="L-BFGS-B",
        bounds=[(0.0, None)],
        options={"gtol": config.gradient_tolerance, "maxiter": config.max_iterations},
    )
    LOGGER.debug(
        "Minimum speed search: success=%s fun=%r x=%r nit=%s message=%s",
        result.success, result.fun, result.x, result.nit, result.message
    )

    min_speed = float(result.fun)
    if not result.success or not math.isfinite(min_speed):
        raise InterceptFailure(InterceptError.NO_STABLE_MINIMUM)
    return min_speed


def round_up_speed(min_speed: float, config: Optional[SolverConfig] = None) -> float:
    """
    Turn a numerical minimum speed into a stable, presentable speed.

    Near the minimum, time grows without bound as speed falls (0.01 kn can
    add hours), so a margin is added before rounding up to the next whole
    display unit.

    Args:
        min_speed: Minimum intercept speed (m/s)
        config: Solver configuration

    Returns:
        Rounded speed (m/s)
    """
    config = config or SolverConfig()
    unit = get_appropriate_speed_unit(config.unit_system)
    display_speed = convert_to_unit(min_speed + config.speed_margin_mps, unit)
    return convert_from_unit(math.ceil(display_speed), unit)


# =============================================================================
# ORCHESTRATOR
# =============================================================================

def describe_solution(solution: InterceptSolution, config: Optional[SolverConfig] = None) -> str:
    """Status line for a solution, e.g. "67.38° at 13 kn for 50m"."""
    config = config or SolverConfig()
    course = get_rounded_string(solution.course_deg) + "°"
    if solution.target_stationary:
        return f"{course} (target stationary)"
    speed = get_speed_string(solution.speed, config.unit_system)
    return f"{course} at {speed} for {get_time_string(solution.time_s)}"


def _check_finite(interceptor: Vector2, target: TargetState) -> None:
    values = interceptor.to_tuple() + target.position.to_tuple() + target.velocity.to_tuple()
    if not all(math.isfinite(v) for v in values) or not math.isfinite(target.direction):
        raise InterceptFailure(InterceptError.INVALID_INPUT,
                               "Positions and velocities must be finite.")


def _solve(
    interceptor: Vector2,
    target: TargetState,
    constraints: InterceptConstraints,
    config: SolverConfig
) -> InterceptSolution:
    _check_finite(interceptor, target)
    check_constraints(constraints)

    target_point = resolve_target_point(
        target, constraints.angle_on_bow, constraints.effective_radius
    )
    LOGGER.debug("Target point %r for target at %r", target_point, target.position)

    canned = check_degenerate(interceptor, target, target_point, constraints, config)
    if canned is not None:
        LOGGER.debug("Target stationary, heading in at nominal speed")
        return canned

    offset = target_point - interceptor
    time_s = constraints.time
    if time_s is None:
        speed = constraints.speed
        if speed is None:
            min_speed = find_minimum_speed(offset, target.velocity, config)
            speed = round_up_speed(min_speed, config)
            LOGGER.debug("Minimum speed %.4f m/s rounded up to %.4f m/s", min_speed, speed)
        time_s = solve_intercept_time(offset, target.velocity, speed)

    return build_solution(offset, target_point, target.velocity, time_s)


def solve_intercept(
    interceptor: Vector2,
    target: TargetState,
    constraints: Optional[InterceptConstraints] = None,
    config: Optional[SolverConfig] = None
) -> InterceptResult:
    """
    Compute an intercept solution for a unit chasing a target.

    Pipeline: validate constraints, resolve the target point, check the
    degenerate cases, then either use the given time directly, or solve the
    quadratic for the given speed, or find a minimum speed numerically first.

    Args:
        interceptor: Interceptor position (meters)
        target: Target state
        constraints: Optional speed/time/AoB/radius constraints
        config: Solver configuration

    Returns:
        InterceptResult with either a solution or an error kind and message
    """
    constraints = constraints or InterceptConstraints()
    config = config or SolverConfig()

    try:
        solution = _solve(interceptor, target, constraints, config)
    except InterceptFailure as failure:
        LOGGER.info("No intercept solution: %s (%s)", failure.message, failure.error.value)
        return InterceptResult.failed(failure)

    return InterceptResult(solution=solution, message=describe_solution(solution, config))
