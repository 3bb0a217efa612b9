"""
Control System Modules
======================

This package contains the control components for a swerve module.

Components:
    - MotorController / AbsoluteEncoder: Hardware seam (plus mocks)
    - GainProfileStore: Mode-dependent gains with stage/commit tuning
    - optimize: Minimal-rotation command optimizer
    - FaultMonitor: Connectivity fault detection and alerts
    - SwerveModule: Per-module facade tying the above together
"""

from .actuator_interface import (
    MotorController,
    AbsoluteEncoder,
    ControlRequest,
    MockMotorController,
    MockAbsoluteEncoder,
)

from .gains import (
    GainSet,
    GainProfile,
    GainProfileStore,
    GainNotConfiguredError,
    MotionProfileConstraints,
    DriveMode,
    ActuatorRole,
)

from .optimizer import optimize, MAX_STEER_ROTATION_DEG

from .fault_monitor import (
    FaultMonitor,
    FaultState,
    ComponentId,
    Alert,
    AlertSeverity,
    AlertSink,
    LoggingAlertSink,
)

from .swerve_module import SwerveModule

__all__ = [
    'MotorController',
    'AbsoluteEncoder',
    'ControlRequest',
    'MockMotorController',
    'MockAbsoluteEncoder',
    'GainSet',
    'GainProfile',
    'GainProfileStore',
    'GainNotConfiguredError',
    'MotionProfileConstraints',
    'DriveMode',
    'ActuatorRole',
    'optimize',
    'MAX_STEER_ROTATION_DEG',
    'FaultMonitor',
    'FaultState',
    'ComponentId',
    'Alert',
    'AlertSeverity',
    'AlertSink',
    'LoggingAlertSink',
    'SwerveModule',
]
