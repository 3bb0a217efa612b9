"""
Swerve Module Configuration
===========================

Static configuration for the swerve modules: mechanical parameters,
device IDs, default gains and dashboard flags.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .control.gains import GainSet, MotionProfileConstraints


@dataclass
class MotorParameters:
    """Mechanical parameters shared by every module."""
    # Gearing (rotor rotations per output rotation)
    drive_gear_ratio: float = 6.75           # SDS MK4i L2

    # Wheel
    wheel_diameter_m: float = 0.1016         # 4 in

    @property
    def wheel_circumference_m(self) -> float:
        """Distance travelled per wheel revolution (m)."""
        return math.pi * self.wheel_diameter_m


@dataclass
class ModuleConfig:
    """Device IDs for one module."""
    drive_id: int
    steer_id: int
    encoder_id: int

    def alert_ids(self) -> Tuple[int, int, int]:
        """(drive, steer, encoder) IDs used in alert texts."""
        return (self.drive_id, self.steer_id, self.encoder_id)


@dataclass
class GainDefaults:
    """Default gains loaded at startup, per operating mode."""
    drive_tele: GainSet = field(default_factory=lambda: GainSet(p=3.0, i=0.0, d=0.0, v=0.12))
    steer_tele: GainSet = field(default_factory=lambda: GainSet(p=750.0, i=5.0, d=15.0, v=0.0))
    drive_auto: GainSet = field(default_factory=lambda: GainSet(p=5.0, i=0.0, d=0.0, v=0.15))
    steer_auto: GainSet = field(default_factory=lambda: GainSet(p=750.0, i=5.0, d=15.0))
    steer_motion: Optional[MotionProfileConstraints] = None


@dataclass
class DashboardConfig:
    """Dashboard and debug logging flags."""
    test_mode: bool = False      # Publish per-cycle debug values


# Default module layout: front-left, front-right, back-left, back-right
DEFAULT_MODULES: Tuple[ModuleConfig, ...] = (
    ModuleConfig(drive_id=1, steer_id=2, encoder_id=9),
    ModuleConfig(drive_id=3, steer_id=4, encoder_id=10),
    ModuleConfig(drive_id=5, steer_id=6, encoder_id=11),
    ModuleConfig(drive_id=7, steer_id=8, encoder_id=12),
)
