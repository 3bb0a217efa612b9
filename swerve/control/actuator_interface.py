"""
Actuator Interface
==================

Hardware seam for a swerve module's drive motor, steer motor and
absolute angle sensor.

Concrete implementations wrap a vendor motor-controller SDK or a
simulator. The control code only talks to these abstractions, so the
estimator, optimizer and fault monitor run without hardware.

Units:
    MotorController position:  rotations (rotor rotations for drive,
                               steering-axis rotations for steer)
    MotorController velocity:  rotations per second
    AbsoluteEncoder angle:     rotations (fractional, any sign)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, List
import logging

from .gains import GainSet, MotionProfileConstraints

logger = logging.getLogger(__name__)


class ControlRequest(Enum):
    """Last control request sent to a motor."""
    NEUTRAL = auto()
    POSITION = auto()
    VELOCITY = auto()


class MotorController(ABC):
    """Setpoint, telemetry and connectivity operations for one motor."""

    @abstractmethod
    def set_position_setpoint(self, rotations: float):
        """Command closed-loop position (rotations)."""

    @abstractmethod
    def set_velocity_setpoint(self, rotations_per_second: float):
        """Command closed-loop velocity (rotations/s)."""

    @abstractmethod
    def get_rotor_position(self) -> float:
        """Accumulated position (rotations)."""

    @abstractmethod
    def get_rotor_velocity(self) -> float:
        """Current velocity (rotations/s)."""

    @abstractmethod
    def set_rotor_position(self, rotations: float):
        """Overwrite the accumulated position, e.g. zero the drive odometry."""

    @abstractmethod
    def is_connected(self) -> bool:
        """True while the controller is responding on the bus."""

    @abstractmethod
    def apply_gains(self, gains: GainSet):
        """Replace the closed-loop gains in one write."""

    def apply_motion_constraints(self, constraints: MotionProfileConstraints):
        """Replace motion profile limits. Motors without profiling ignore this."""

    @abstractmethod
    def stop(self):
        """Drop to neutral output immediately."""


class AbsoluteEncoder(ABC):
    """Absolute steering angle sensor."""

    @abstractmethod
    def get_absolute_angle(self) -> float:
        """Absolute angle (rotations)."""

    @abstractmethod
    def is_connected(self) -> bool:
        """True while the sensor is responding on the bus."""


@dataclass
class MotorCommand:
    """One recorded setpoint."""
    request: ControlRequest
    value: float = 0.0


class MockMotorController(MotorController):
    """Mock motor for testing without hardware. Records every call."""

    def __init__(self, device_id: int = 0):
        self.device_id = device_id
        self.connected = True
        self.rotor_position = 0.0
        self.rotor_velocity = 0.0

        self.gains: Optional[GainSet] = None
        self.gain_history: List[GainSet] = []
        self.motion_constraints: Optional[MotionProfileConstraints] = None
        self.commands: List[MotorCommand] = []
        self.stop_count = 0

    def set_position_setpoint(self, rotations: float):
        self.commands.append(MotorCommand(ControlRequest.POSITION, rotations))

    def set_velocity_setpoint(self, rotations_per_second: float):
        self.commands.append(MotorCommand(ControlRequest.VELOCITY, rotations_per_second))

    def get_rotor_position(self) -> float:
        return self.rotor_position

    def get_rotor_velocity(self) -> float:
        return self.rotor_velocity

    def set_rotor_position(self, rotations: float):
        self.rotor_position = rotations

    def is_connected(self) -> bool:
        return self.connected

    def apply_gains(self, gains: GainSet):
        self.gains = gains
        self.gain_history.append(gains)

    def apply_motion_constraints(self, constraints: MotionProfileConstraints):
        self.motion_constraints = constraints

    def stop(self):
        self.commands.append(MotorCommand(ControlRequest.NEUTRAL))
        self.stop_count += 1

    @property
    def last_command(self) -> Optional[MotorCommand]:
        """Most recent setpoint, or None if nothing was sent."""
        return self.commands[-1] if self.commands else None


class MockAbsoluteEncoder(AbsoluteEncoder):
    """Mock absolute encoder with a settable reading."""

    def __init__(self, device_id: int = 0, rotations: float = 0.0):
        self.device_id = device_id
        self.rotations = rotations
        self.connected = True

    def get_absolute_angle(self) -> float:
        return self.rotations

    def is_connected(self) -> bool:
        return self.connected
