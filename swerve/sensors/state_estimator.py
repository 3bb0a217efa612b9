"""
State Estimator
===============

Converts raw motor and sensor readings into the canonical module
position and state.

    angle    = wrap(360 * absolute_rotations)                   [deg]
    distance = rotor_rotations / drive_gear_ratio * circumference  [m]
    speed    = rotor_velocity  / drive_gear_ratio * circumference  [m/s]

The angle always comes from the absolute sensor, so it never drifts.
Readings from a disconnected device are passed through unchanged; the
fault monitor reports the disconnect.
"""

from typing import TYPE_CHECKING
import logging

from ..state import ModulePosition, ModuleState
from ..utils.math_utils import wrap_degrees

if TYPE_CHECKING:
    from ..config import MotorParameters
    from ..control.actuator_interface import MotorController, AbsoluteEncoder

logger = logging.getLogger(__name__)


class StateEstimator:
    """Reads the drive motor and absolute encoder of one module."""

    def __init__(self, drive: 'MotorController', encoder: 'AbsoluteEncoder',
                 parameters: 'MotorParameters'):
        self.drive = drive
        self.encoder = encoder
        self.parameters = parameters
        self._position = ModulePosition()

    @property
    def position(self) -> ModulePosition:
        """Position from the last refresh()."""
        return self._position

    def refresh(self) -> ModulePosition:
        """
        Read the sensors and update the module position.

        Returns:
            ModulePosition with the absolute angle and drive distance
        """
        angle = self._absolute_angle_degrees()
        distance = self.rotor_to_linear(self.drive.get_rotor_position())
        self._position = ModulePosition(distance=distance, angle=angle)
        return self._position

    def current_speed_and_angle(self) -> ModuleState:
        """Live wheel speed (m/s) and absolute steering angle."""
        speed = self.rotor_to_linear(self.drive.get_rotor_velocity())
        return ModuleState(speed=speed, angle=self._absolute_angle_degrees())

    def rotor_to_linear(self, rotor_rotations: float) -> float:
        """Drive rotor rotations (or rotations/s) to meters (or m/s)."""
        return (rotor_rotations / self.parameters.drive_gear_ratio
                * self.parameters.wheel_circumference_m)

    def speed_to_rotor_velocity(self, speed: float) -> float:
        """Wheel speed (m/s) to drive rotor velocity (rotations/s)."""
        return (speed * self.parameters.drive_gear_ratio
                / self.parameters.wheel_circumference_m)

    def _absolute_angle_degrees(self) -> float:
        return wrap_degrees(360.0 * self.encoder.get_absolute_angle())
