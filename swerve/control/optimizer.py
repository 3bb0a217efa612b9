"""
Command Optimizer
=================

Chooses the cheapest equivalent of a desired module state.

A wheel pointed backwards and driven backwards moves the robot the same
way as one pointed forwards and driven forwards. When reaching the
desired angle takes more than 90° of steering, the optimizer targets the
opposite heading and reverses the speed instead, so the steer motor
never turns more than 90°.
"""

from ..state import ModuleState
from ..utils.math_utils import angular_distance_degrees

# A delta of exactly 90° is not flipped
MAX_STEER_ROTATION_DEG = 90.0


def optimize(desired: ModuleState, current_angle: float) -> ModuleState:
    """
    Optimize a desired state against the current steering angle.

    Args:
        desired: Requested speed and angle
        current_angle: Measured steering angle (degrees)

    Returns:
        desired unchanged, or the flipped equivalent with reversed speed
        and angle + 180°
    """
    delta = angular_distance_degrees(current_angle, desired.angle)
    if abs(delta) > MAX_STEER_ROTATION_DEG:
        return ModuleState(speed=-desired.speed, angle=desired.angle + 180.0)
    return desired
