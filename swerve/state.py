"""
Module State Types
==================

Canonical swerve module state and position. Angles are stored in
degrees, wrapped into [0, 360) on construction.
"""

from dataclasses import dataclass

from .utils.math_utils import wrap_degrees


@dataclass(frozen=True)
class ModuleState:
    """
    Signed wheel speed and steering angle.

    A negative speed means the wheel is pointed 180° away from its
    direction of travel.
    """
    speed: float = 0.0       # m/s
    angle: float = 0.0       # degrees, [0, 360)

    def __post_init__(self):
        object.__setattr__(self, 'angle', wrap_degrees(self.angle))


@dataclass(frozen=True)
class ModulePosition:
    """Drive distance travelled and absolute steering angle."""
    distance: float = 0.0    # meters
    angle: float = 0.0       # degrees, [0, 360)

    def __post_init__(self):
        object.__setattr__(self, 'angle', wrap_degrees(self.angle))
