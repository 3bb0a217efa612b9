"""
Swerve Module Simulator
=======================

Simulated drive motor, steer motor and absolute encoder that implement
the actuator interface, for running a SwerveModule without hardware.

Physics is deliberately simple:
    - Drive velocity slews toward its setpoint under an acceleration limit
    - Steer position moves along the shortest path toward its setpoint
      under a rate limit (steering-axis rotations)
    - The steer motor closes its loop on the encoder, so the encoder
      reports the steer position directly

Call step(dt) once per control period.
"""

from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np

from ..control.actuator_interface import (
    MotorController, AbsoluteEncoder, ControlRequest
)
from ..control.fault_monitor import ComponentId
from ..control.gains import GainSet, MotionProfileConstraints
from ..utils.math_utils import clamp, normalize_degrees

logger = logging.getLogger(__name__)


@dataclass
class ModuleSimConfig:
    """Configuration for a simulated swerve module."""
    # Drive motor (rotor rotations/s)
    max_drive_velocity: float = 100.0
    max_drive_acceleration: float = 400.0

    # Steer motor (steering-axis rotations/s)
    max_steer_rate: float = 2.5

    # Steering angle at power-on (rotations)
    initial_steer_rotations: float = 0.0

    # Encoder
    encoder_noise_std: float = 0.0       # rotations

    # Drive velocity measurement noise (rotations/s)
    velocity_noise_std: float = 0.0

    seed: Optional[int] = None


class SimulatedMotor(MotorController):
    """
    Motor that tracks its last setpoint.

    Args:
        device_id: CAN ID used in logs
        max_velocity: Velocity limit (rotations/s)
        max_acceleration: Velocity slew limit (rotations/s^2)
        rng: Random generator for measurement noise
        velocity_noise_std: Std dev of velocity noise (rotations/s)
    """

    def __init__(self, device_id: int, max_velocity: float,
                 max_acceleration: float,
                 rng: Optional[np.random.Generator] = None,
                 velocity_noise_std: float = 0.0):
        self.device_id = device_id
        self.max_velocity = max_velocity
        self.max_acceleration = max_acceleration
        self.velocity_noise_std = velocity_noise_std
        self._rng = rng or np.random.default_rng()

        self.connected = True
        self.gains: Optional[GainSet] = None
        self.motion_constraints: Optional[MotionProfileConstraints] = None

        self._request = ControlRequest.NEUTRAL
        self._setpoint = 0.0
        self._position = 0.0
        self._velocity = 0.0

    @property
    def request(self) -> ControlRequest:
        return self._request

    @property
    def setpoint(self) -> float:
        return self._setpoint

    def set_position_setpoint(self, rotations: float):
        self._request = ControlRequest.POSITION
        self._setpoint = rotations

    def set_velocity_setpoint(self, rotations_per_second: float):
        self._request = ControlRequest.VELOCITY
        self._setpoint = rotations_per_second

    def get_rotor_position(self) -> float:
        return self._position

    def get_rotor_velocity(self) -> float:
        if self.velocity_noise_std > 0:
            return self._velocity + float(self._rng.normal(0.0, self.velocity_noise_std))
        return self._velocity

    def set_rotor_position(self, rotations: float):
        self._position = rotations

    def is_connected(self) -> bool:
        return self.connected

    def apply_gains(self, gains: GainSet):
        self.gains = gains
        logger.debug(f"Motor {self.device_id} gains: {gains}")

    def apply_motion_constraints(self, constraints: MotionProfileConstraints):
        self.motion_constraints = constraints

    def stop(self):
        self._request = ControlRequest.NEUTRAL
        self._setpoint = 0.0

    def step(self, dt: float):
        """Advance the motor by dt seconds."""
        if dt <= 0:
            return

        if self._request == ControlRequest.POSITION:
            self._step_position(dt)
        else:
            target = self._setpoint if self._request == ControlRequest.VELOCITY else 0.0
            target = clamp(target, -self.max_velocity, self.max_velocity)
            max_change = self.max_acceleration * dt
            self._velocity += clamp(target - self._velocity, -max_change, max_change)
            self._position += self._velocity * dt

    def _step_position(self, dt: float):
        # Shortest path on the steering circle, in rotations
        error = normalize_degrees(360.0 * (self._setpoint - self._position)) / 360.0
        max_move = self.max_velocity * dt
        move = clamp(error, -max_move, max_move)
        self._position += move
        self._velocity = move / dt


class SimulatedEncoder(AbsoluteEncoder):
    """Absolute encoder mounted on a simulated steer motor."""

    def __init__(self, device_id: int, steer: SimulatedMotor,
                 rng: Optional[np.random.Generator] = None,
                 noise_std: float = 0.0):
        self.device_id = device_id
        self.steer = steer
        self.noise_std = noise_std
        self._rng = rng or np.random.default_rng()
        self.connected = True

    def get_absolute_angle(self) -> float:
        rotations = self.steer.get_rotor_position()
        if self.noise_std > 0:
            rotations += float(self._rng.normal(0.0, self.noise_std))
        return rotations

    def is_connected(self) -> bool:
        return self.connected


class SimulatedModuleHardware:
    """
    Drive motor, steer motor and encoder of one simulated module.

    Args:
        drive_id: Drive motor CAN ID
        steer_id: Steer motor CAN ID
        encoder_id: Encoder CAN ID
        config: Simulation parameters
    """

    def __init__(self, drive_id: int = 1, steer_id: int = 2, encoder_id: int = 9,
                 config: Optional[ModuleSimConfig] = None):
        self.config = config or ModuleSimConfig()
        rng = np.random.default_rng(self.config.seed)

        self.drive = SimulatedMotor(
            drive_id,
            max_velocity=self.config.max_drive_velocity,
            max_acceleration=self.config.max_drive_acceleration,
            rng=rng,
            velocity_noise_std=self.config.velocity_noise_std,
        )
        self.steer = SimulatedMotor(
            steer_id,
            max_velocity=self.config.max_steer_rate,
            max_acceleration=np.inf,
            rng=rng,
        )
        self.steer.set_rotor_position(self.config.initial_steer_rotations)
        self.encoder = SimulatedEncoder(
            encoder_id,
            self.steer,
            rng=rng,
            noise_std=self.config.encoder_noise_std,
        )

    def step(self, dt: float):
        """Advance both motors by dt seconds."""
        self.drive.step(dt)
        self.steer.step(dt)

    def set_connected(self, component: ComponentId, connected: bool):
        """Simulate a device dropping off or returning to the bus."""
        device = {
            ComponentId.DRIVE: self.drive,
            ComponentId.STEER: self.steer,
            ComponentId.ENCODER: self.encoder,
        }[component]
        device.connected = connected
        logger.info(f"Simulated {component.value} {'connected' if connected else 'disconnected'}")
