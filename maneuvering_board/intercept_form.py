"""
Text-entry front end for the intercept solver.

Parses the four optional fields a user fills in (speed, time, angle-on-bow,
radius) and hands them to solve_intercept. Blank fields are unconstrained.
InterceptForm keeps the last result until a field changes, the same way an
edit dialog re-solves when the user leaves a field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from .config import SolverConfig
from .intercept import (
    InterceptConstraints,
    InterceptError,
    InterceptFailure,
    InterceptResult,
    InterceptSolution,
    TargetState,
    solve_intercept,
)
from .units import UnitSystem, parse_angle, parse_length, parse_speed, parse_time
from .vector import Vector2


LOGGER = logging.getLogger(__name__)

FIELD_NAMES = ("speed", "time", "aob", "radius")


@dataclass(frozen=True)
class InterceptFields:
    """Raw text of the intercept fields."""
    speed: str = ""
    time: str = ""
    aob: str = ""
    radius: str = ""


def _invalid(kind: str, text: str) -> InterceptFailure:
    return InterceptFailure(
        InterceptError.INVALID_INPUT,
        f"'{text.strip()}' is not a valid {kind}. Invalid data."
    )


def parse_constraints(fields: InterceptFields, unit_system: UnitSystem) -> InterceptConstraints:
    """
    Convert field text into solver constraints.

    Args:
        fields: Raw field text
        unit_system: Unit system for unsuffixed speeds and lengths

    Returns:
        Constraints in internal units; blank fields and a zero radius are None

    Raises:
        InterceptFailure: INVALID_INPUT naming the first field that fails to parse
    """
    speed = time = aob = radius = None

    if fields.speed.strip():
        speed = parse_speed(fields.speed, unit_system)
        if speed is None:
            raise _invalid("speed", fields.speed)

    if fields.time.strip():
        parsed = parse_time(fields.time)
        if parsed is None:
            raise _invalid("time", fields.time)
        time = parsed[0]

    if fields.aob.strip():
        aob = parse_angle(fields.aob)
        if aob is None:
            raise _invalid("angle", fields.aob)

    if fields.radius.strip():
        value = parse_length(fields.radius, unit_system)
        if value is None:
            raise _invalid("length", fields.radius)
        if value != 0:
            radius = value

    return InterceptConstraints(speed=speed, time=time, angle_on_bow=aob, radius=radius)


def solve_from_fields(
    interceptor: Vector2,
    target: TargetState,
    fields: InterceptFields,
    config: Optional[SolverConfig] = None
) -> InterceptResult:
    """Parse the fields and solve; parse errors come back as INVALID_INPUT results."""
    config = config or SolverConfig()
    try:
        constraints = parse_constraints(fields, config.unit_system)
    except InterceptFailure as failure:
        LOGGER.info("Rejected intercept input: %s", failure.message)
        return InterceptResult.failed(failure)
    return solve_intercept(interceptor, target, constraints, config)


class InterceptForm:
    """
    Editable intercept request for one interceptor/target pair.

    Every field change discards the cached result; update() re-solves from
    scratch and accept() returns the solution or raises if there is none.
    """

    def __init__(
        self,
        interceptor: Vector2,
        target: TargetState,
        config: Optional[SolverConfig] = None
    ):
        self.interceptor = interceptor
        self.target = target
        self.config = config or SolverConfig()
        self.fields = InterceptFields()
        self._result: Optional[InterceptResult] = None
        self.update()

    @property
    def result(self) -> Optional[InterceptResult]:
        """Last result, or None if a field changed since the last update."""
        return self._result

    @property
    def status(self) -> str:
        """Status line of the last result."""
        return self._result.message if self._result is not None else ""

    def set_field(self, name: str, text: str) -> None:
        """
        Change one field's text.

        Args:
            name: One of "speed", "time", "aob", "radius"
            text: New field text
        """
        if name not in FIELD_NAMES:
            raise ValueError(f"Unknown intercept field '{name}'")
        self.fields = replace(self.fields, **{name: text})
        self._result = None

    def update(self) -> InterceptResult:
        """Solve with the current fields unless the last result is still valid."""
        if self._result is None:
            self._result = solve_from_fields(self.interceptor, self.target, self.fields, self.config)
        return self._result

    def accept(self) -> InterceptSolution:
        """
        Return the solution for the current fields.

        Raises:
            InterceptFailure: If the current fields have no solution
        """
        result = self.update()
        if result.solution is None:
            raise InterceptFailure(result.error, result.message)
        return result.solution
