"""
Hardware Simulation
===================

Simulated motors and encoder exposing the same interface as the real
devices, for running a swerve module without hardware.

Usage:
    from swerve.simulation import SimulatedModuleHardware

    hw = SimulatedModuleHardware()
    module = SwerveModule(hw.drive, hw.steer, hw.encoder, ...)
    module.set_state(desired)
    hw.step(0.02)
"""

from .module_sim import (
    ModuleSimConfig,
    SimulatedMotor,
    SimulatedEncoder,
    SimulatedModuleHardware,
)

__all__ = [
    'ModuleSimConfig',
    'SimulatedMotor',
    'SimulatedEncoder',
    'SimulatedModuleHardware',
]
