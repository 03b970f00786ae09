"""Maneuvering board intercept solver package."""

from .vector import (
    Vector2,
    normalize_angle,
    swap_bearing,
)

from .units import (
    # Enums
    UnitSystem,
    SpeedUnit,
    LengthUnit,
    # Conversion
    get_appropriate_speed_unit,
    get_appropriate_length_unit,
    convert_to_unit,
    convert_from_unit,
    # Parsing
    parse_speed,
    parse_length,
    parse_time,
    parse_angle,
    # Formatting
    get_rounded_string,
    get_speed_string,
    get_length_string,
    get_time_string,
)

from .config import SolverConfig

from .intercept import (
    # Errors
    InterceptError,
    InterceptFailure,
    # State types
    TargetState,
    InterceptConstraints,
    InterceptSolution,
    InterceptResult,
    # Pipeline stages
    resolve_target_point,
    check_constraints,
    check_degenerate,
    solve_intercept_time,
    find_minimum_speed,
    round_up_speed,
    build_solution,
    describe_solution,
    solve_intercept,
)

from .intercept_form import (
    InterceptFields,
    InterceptForm,
    parse_constraints,
    solve_from_fields,
)

__all__ = [
    # Vector module
    "Vector2",
    "normalize_angle",
    "swap_bearing",
    # Units module - Enums
    "UnitSystem",
    "SpeedUnit",
    "LengthUnit",
    # Units module - Conversion
    "get_appropriate_speed_unit",
    "get_appropriate_length_unit",
    "convert_to_unit",
    "convert_from_unit",
    # Units module - Parsing
    "parse_speed",
    "parse_length",
    "parse_time",
    "parse_angle",
    # Units module - Formatting
    "get_rounded_string",
    "get_speed_string",
    "get_length_string",
    "get_time_string",
    # Config module
    "SolverConfig",
    # Intercept module - Errors
    "InterceptError",
    "InterceptFailure",
    # Intercept module - State types
    "TargetState",
    "InterceptConstraints",
    "InterceptSolution",
    "InterceptResult",
    # Intercept module - Pipeline stages
    "resolve_target_point",
    "check_constraints",
    "check_degenerate",
    "solve_intercept_time",
    "find_minimum_speed",
    "round_up_speed",
    "build_solution",
    "describe_solution",
    "solve_intercept",
    # Intercept form module
    "InterceptFields",
    "InterceptForm",
    "parse_constraints",
    "solve_from_fields",
]
