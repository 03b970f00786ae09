#!/usr/bin/env python3
"""
Tests for the text-entry intercept form.

Tests:
- Field parsing into constraints (units, blanks, zero radius)
- Parse errors reported as INVALID_INPUT results
- InterceptForm caching, field changes, and accept()
"""

import math
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from maneuvering_board.config import SolverConfig
from maneuvering_board.intercept import InterceptError, InterceptFailure, TargetState
from maneuvering_board.intercept_form import (
    InterceptFields,
    InterceptForm,
    parse_constraints,
    solve_from_fields,
)
from maneuvering_board.units import UnitSystem
from maneuvering_board.vector import Vector2


KNOT_MPS = 1852 / 3600


@pytest.fixture
def origin():
    return Vector2(0.0, 0.0)


@pytest.fixture
def target():
    """Target at (10, 0) moving north at 5 m/s."""
    return TargetState(position=Vector2(10.0, 0.0), velocity=Vector2(0.0, 5.0))


# =============================================================================
# PARSING
# =============================================================================

class TestParseConstraints:
    """Tests for converting field text to constraints."""

    def test_blank_fields_are_unconstrained(self):
        constraints = parse_constraints(InterceptFields(), UnitSystem.NAUTICAL_METRIC)
        assert constraints.speed is None
        assert constraints.time is None
        assert constraints.angle_on_bow is None
        assert constraints.radius is None

    def test_whitespace_is_blank(self):
        fields = InterceptFields(speed="   ", aob=" ")
        constraints = parse_constraints(fields, UnitSystem.NAUTICAL_METRIC)
        assert constraints.speed is None
        assert constraints.angle_on_bow is None

    def test_values_in_internal_units(self):
        fields = InterceptFields(speed="12", aob="45", radius="2")
        constraints = parse_constraints(fields, UnitSystem.NAUTICAL_METRIC)
        assert constraints.speed == pytest.approx(12 * KNOT_MPS)
        assert constraints.angle_on_bow == pytest.approx(math.pi / 4)
        assert constraints.radius == pytest.approx(3704.0)

    @pytest.mark.parametrize("text,seconds", [
        ("1:00", 3600.0),
        ("30m", 1800.0),
        ("+1h 15m", 4500.0),
        ("20", 1200.0),
    ])
    def test_time_field(self, text, seconds):
        constraints = parse_constraints(InterceptFields(time=text), UnitSystem.NAUTICAL_METRIC)
        assert constraints.time == pytest.approx(seconds)

    def test_metric_unsuffixed_speed(self):
        constraints = parse_constraints(InterceptFields(speed="36"), UnitSystem.METRIC)
        assert constraints.speed == pytest.approx(10.0)

    def test_zero_radius_is_absent(self):
        constraints = parse_constraints(InterceptFields(radius="0"), UnitSystem.NAUTICAL_METRIC)
        assert constraints.radius is None

    @pytest.mark.parametrize("fields,message", [
        (InterceptFields(speed="fast"), "'fast' is not a valid speed. Invalid data."),
        (InterceptFields(time="soon"), "'soon' is not a valid time. Invalid data."),
        (InterceptFields(aob="port"), "'port' is not a valid angle. Invalid data."),
        (InterceptFields(radius=" far "), "'far' is not a valid length. Invalid data."),
        (InterceptFields(speed="-3"), "'-3' is not a valid speed. Invalid data."),
    ])
    def test_parse_errors(self, fields, message):
        with pytest.raises(InterceptFailure) as exc_info:
            parse_constraints(fields, UnitSystem.NAUTICAL_METRIC)
        assert exc_info.value.error is InterceptError.INVALID_INPUT
        assert exc_info.value.message == message


class TestSolveFromFields:
    """Tests for parse-then-solve."""

    def test_speed_with_suffix(self, origin, target):
        result = solve_from_fields(origin, target, InterceptFields(speed="13 m/s"))
        assert result.success
        assert result.solution.speed == pytest.approx(13.0)
        assert result.message == "67.38° at 25.27 kn for 1s"

    def test_parse_error_is_a_result(self, origin, target):
        result = solve_from_fields(origin, target, InterceptFields(speed="fast"))
        assert not result.success
        assert result.error is InterceptError.INVALID_INPUT
        assert result.message == "'fast' is not a valid speed. Invalid data."

    def test_zero_radius_with_aob_needs_radius(self, origin, target):
        result = solve_from_fields(origin, target, InterceptFields(aob="30", radius="0"))
        assert result.error is InterceptError.INCOMPLETE_CIRCLE_CONSTRAINT
        assert result.message == "Using AoB requires a radius."

    def test_unit_system_from_config(self, origin):
        target = TargetState(position=Vector2(1_000.0, 0.0))
        config = SolverConfig(unit_system=UnitSystem.METRIC, stationary_speed=18.0)
        result = solve_from_fields(origin, target, InterceptFields(), config)
        assert result.solution.speed == pytest.approx(5.0)
        assert result.message == "90° (target stationary)"


# =============================================================================
# FORM
# =============================================================================

class TestInterceptForm:
    """Tests for the stateful form."""

    def test_solves_on_creation(self, origin, target):
        form = InterceptForm(origin, target)
        assert form.result is not None
        assert form.status == form.result.message

    def test_set_field_discards_result(self, origin, target):
        form = InterceptForm(origin, target)
        form.set_field("speed", "13 m/s")
        assert form.result is None
        assert form.status == ""
        result = form.update()
        assert result.solution.speed == pytest.approx(13.0)
        assert form.fields.speed == "13 m/s"

    def test_update_reuses_cached_result(self, origin, target):
        form = InterceptForm(origin, target)
        first = form.update()
        assert form.update() is first

    def test_accept_returns_solution(self, origin, target):
        form = InterceptForm(origin, target)
        form.set_field("time", "2s")
        solution = form.accept()
        assert solution.time_s == pytest.approx(2.0)
        assert solution.velocity == Vector2(5, 5)

    def test_accept_raises_without_solution(self, origin, target):
        form = InterceptForm(origin, target)
        form.set_field("speed", "10")
        form.set_field("time", "1:00")
        with pytest.raises(InterceptFailure) as exc_info:
            form.accept()
        assert exc_info.value.error is InterceptError.CONFLICTING_CONSTRAINTS
        assert form.status == "Remove speed or time."

    def test_clearing_field_recovers(self, origin, target):
        form = InterceptForm(origin, target)
        form.set_field("speed", "10")
        form.set_field("time", "1:00")
        assert not form.update().success
        form.set_field("time", "")
        assert form.update().success

    def test_unknown_field_raises(self, origin, target):
        form = InterceptForm(origin, target)
        with pytest.raises(ValueError):
            form.set_field("heading", "90")
