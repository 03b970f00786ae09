"""
Command-line intercept calculator.

Usage:
    python scripts/intercept.py --unit 0,0 --target 10,0 --target-velocity 0,5 --speed 13
    python scripts/intercept.py --target 5,5 --target-velocity 12,0 --aob 90 --radius 2 -v

Positions are "x,y" in the unit system's length unit (nautical miles by
default), velocities "x,y" in its speed unit (knots by default). X is east,
Y is north.
"""

import argparse
import logging
import math
import sys
from dataclasses import replace
from typing import List, Optional

from .config import SolverConfig
from .intercept import TargetState
from .intercept_form import InterceptFields, solve_from_fields
from .units import (
    UnitSystem,
    convert_from_unit,
    convert_to_unit,
    get_appropriate_length_unit,
    get_appropriate_speed_unit,
    get_length_string,
    get_rounded_string,
    get_speed_string,
    get_time_string,
)
from .vector import Vector2


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _pair(text: str) -> tuple:
    """argparse type for "x,y"."""
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected x,y but got '{text}'")
    try:
        x, y = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected numbers in '{text}'") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise argparse.ArgumentTypeError(f"expected finite numbers in '{text}'")
    return (x, y)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute a maneuvering board intercept solution",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/intercept.py --target 10,0 --target-velocity 0,5 --speed 13
    python scripts/intercept.py --target 10,0 --target-velocity 0,5 --time 1:00
    python scripts/intercept.py --target 10,0 --target-velocity 0,5 --unit-system metric
        """,
    )

    # Geometry
    parser.add_argument(
        "--unit",
        type=_pair,
        default=(0.0, 0.0),
        help="Interceptor position x,y (default: 0,0)",
    )
    parser.add_argument(
        "--target",
        type=_pair,
        required=True,
        help="Target position x,y",
    )
    parser.add_argument(
        "--target-velocity",
        type=_pair,
        default=(0.0, 0.0),
        help="Target velocity x,y (default: stationary)",
    )
    parser.add_argument(
        "--target-direction",
        type=float,
        default=0.0,
        help="Target heading in degrees, used when stationary (default: 0)",
    )

    # Constraints
    parser.add_argument("--speed", default="", help="Intercept speed, e.g. 15 or '15 kn'")
    parser.add_argument("--time", default="", help="Time to intercept, e.g. 1:30 or '45m'")
    parser.add_argument("--aob", default="", help="Angle on bow in degrees")
    parser.add_argument("--radius", default="", help="Stand-off radius, e.g. 2 or '2 nm'")

    # Settings
    parser.add_argument(
        "--unit-system",
        choices=[system.value for system in UnitSystem],
        default=None,
        help="Unit system (default: from config/environment, else nautical_metric)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON solver config",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the calculator; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        config = SolverConfig.from_json(args.config) if args.config else SolverConfig.from_env()
    except (OSError, ValueError) as e:
        parser.error(str(e))
    if args.unit_system:
        config = replace(config, unit_system=UnitSystem.parse(args.unit_system))

    length_unit = get_appropriate_length_unit(config.unit_system)
    speed_unit = get_appropriate_speed_unit(config.unit_system)

    def to_position(pair: tuple) -> Vector2:
        return Vector2(convert_from_unit(pair[0], length_unit), convert_from_unit(pair[1], length_unit))

    interceptor = to_position(args.unit)
    target = TargetState(
        position=to_position(args.target),
        velocity=Vector2(
            convert_from_unit(args.target_velocity[0], speed_unit),
            convert_from_unit(args.target_velocity[1], speed_unit),
        ),
        direction=math.radians(args.target_direction),
    )
    fields = InterceptFields(speed=args.speed, time=args.time, aob=args.aob, radius=args.radius)

    result = solve_from_fields(interceptor, target, fields, config)
    print(result.message)
    if result.solution is None:
        return 1

    solution = result.solution
    x = get_rounded_string(convert_to_unit(solution.intercept_point.x, length_unit))
    y = get_rounded_string(convert_to_unit(solution.intercept_point.y, length_unit))
    print(f"  Course:    {get_rounded_string(solution.course_deg)}°")
    print(f"  Speed:     {get_speed_string(solution.speed, config.unit_system)}")
    print(f"  Time:      {get_time_string(solution.time_s)}")
    print(f"  Intercept: ({x}, {y}) {length_unit.abbreviation}")
    print(f"  Distance:  {get_length_string(solution.speed * solution.time_s, config.unit_system)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
