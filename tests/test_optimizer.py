"""
Unit tests for the command optimizer.

Tests the flip rule, the 90° boundary, speed magnitude preservation and
the maximum steering rotation over a sweep of inputs.
"""

import itertools
import math

import pytest

from swerve.control.optimizer import optimize, MAX_STEER_ROTATION_DEG
from swerve.state import ModuleState
from swerve.utils.math_utils import angular_distance_degrees


# Sweep grid: angles every 7.5° across several turns, both speed signs
ANGLES = [a * 7.5 for a in range(-96, 97)]
SPEEDS = [-3.0, -0.5, 0.0, 1.0, 2.75]


class TestScenarios:
    """Worked examples."""

    def test_large_delta_flips(self):
        """Current 10°, desired 200° should flip to -3.0 at 20°."""
        result = optimize(ModuleState(speed=3.0, angle=200.0), 10.0)

        assert result.speed == -3.0
        assert result.angle == pytest.approx(20.0)

    def test_small_delta_unchanged(self):
        """Current 0°, desired 45° should pass through unchanged."""
        desired = ModuleState(speed=2.0, angle=45.0)
        result = optimize(desired, 0.0)

        assert result == desired

    def test_exactly_90_not_flipped(self):
        """A delta of exactly 90° should not flip."""
        desired = ModuleState(speed=1.0, angle=90.0)
        result = optimize(desired, 0.0)

        assert result.speed == 1.0
        assert result.angle == 90.0

    def test_exactly_minus_90_not_flipped(self):
        """A delta of exactly -90° should not flip."""
        desired = ModuleState(speed=1.0, angle=270.0)
        result = optimize(desired, 0.0)

        assert result.speed == 1.0
        assert result.angle == 270.0

    def test_just_over_90_flips(self):
        """A delta just over 90° should flip."""
        result = optimize(ModuleState(speed=1.0, angle=90.5), 0.0)

        assert result.speed == -1.0
        assert result.angle == pytest.approx(270.5)

    def test_opposite_angle_flips(self):
        """A 180° delta should flip back onto the current angle."""
        result = optimize(ModuleState(speed=2.0, angle=180.0), 0.0)

        assert result.speed == -2.0
        assert result.angle == pytest.approx(0.0)

    def test_wraparound_no_flip(self):
        """350° → 10° is a 20° move, not 340°."""
        desired = ModuleState(speed=1.5, angle=10.0)

        assert optimize(desired, 350.0) == desired

    def test_negative_speed_flipped_positive(self):
        """Flipping a negative speed should make it positive."""
        result = optimize(ModuleState(speed=-2.0, angle=180.0), 0.0)

        assert result.speed == 2.0


class TestProperties:
    """Properties over a sweep of inputs."""

    def test_speed_magnitude_preserved(self):
        """|speed| should never change."""
        for speed, angle, current in itertools.product(SPEEDS, ANGLES[::4], ANGLES[::5]):
            result = optimize(ModuleState(speed=speed, angle=angle), current)
            assert abs(result.speed) == abs(speed)

    def test_rotation_at_most_90(self):
        """Result should never be more than 90° from the current angle."""
        for angle, current in itertools.product(ANGLES[::3], ANGLES[::3]):
            result = optimize(ModuleState(speed=1.0, angle=angle), current)
            delta = angular_distance_degrees(current, result.angle)
            assert abs(delta) <= MAX_STEER_ROTATION_DEG + 1e-9

    def test_result_angle_canonical(self):
        """Result angle should be wrapped into [0, 360)."""
        for angle, current in itertools.product(ANGLES[::6], ANGLES[::6]):
            result = optimize(ModuleState(speed=1.0, angle=angle), current)
            assert 0.0 <= result.angle < 360.0

    def test_pure_function(self):
        """Identical inputs should give identical outputs."""
        desired = ModuleState(speed=3.0, angle=200.0)

        assert optimize(desired, 10.0) == optimize(desired, 10.0)
        assert desired == ModuleState(speed=3.0, angle=200.0)

    def test_same_direction_of_travel(self):
        """Flipped and unflipped commands should describe the same motion."""
        for angle, current in itertools.product(ANGLES[::8], ANGLES[::8]):
            desired = ModuleState(speed=2.0, angle=angle)
            result = optimize(desired, current)
            vx = result.speed * math.cos(math.radians(result.angle))
            vy = result.speed * math.sin(math.radians(result.angle))
            assert vx == pytest.approx(2.0 * math.cos(math.radians(angle)), abs=1e-9)
            assert vy == pytest.approx(2.0 * math.sin(math.radians(angle)), abs=1e-9)
