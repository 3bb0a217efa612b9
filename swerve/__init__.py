"""
Swerve Module Control
=====================

State estimation, command optimization, gain profiles and fault
monitoring for one independently steered, independently driven wheel.

Subpackages:
    - control: Actuator seam, optimizer, gains, faults, module facade
    - sensors: Position and state estimation
    - telemetry: Tuning table and debug publishing
    - simulation: Simulated hardware
    - utils: Angle and numeric helpers
"""

from .state import ModuleState, ModulePosition

__version__ = "0.1.0"

__all__ = [
    'ModuleState',
    'ModulePosition',
]
