"""
Shared test fixtures for swerve module unit tests.
"""

import math

import pytest

from swerve.config import GainDefaults, ModuleConfig, MotorParameters
from swerve.control.actuator_interface import MockMotorController, MockAbsoluteEncoder
from swerve.control.fault_monitor import LoggingAlertSink
from swerve.control.gains import (
    DriveMode, GainProfile, GainProfileStore, GainSet, MotionProfileConstraints
)
from swerve.control.swerve_module import SwerveModule
from swerve.telemetry.dash import Dash, TuningTable


@pytest.fixture
def motor_parameters():
    """Round-number mechanics: 5:1 drive, 2 m wheel circumference."""
    return MotorParameters(drive_gear_ratio=5.0, wheel_diameter_m=2.0 / math.pi)


@pytest.fixture
def module_config():
    """Device IDs for one module."""
    return ModuleConfig(drive_id=1, steer_id=2, encoder_id=9)


@pytest.fixture
def drive_motor():
    return MockMotorController(device_id=1)


@pytest.fixture
def steer_motor():
    return MockMotorController(device_id=2)


@pytest.fixture
def encoder():
    return MockAbsoluteEncoder(device_id=9)


@pytest.fixture
def tele_profile():
    """Teleop profile with drive velocity feedforward."""
    return GainProfile(
        drive=GainSet(p=1.0, i=0.0, d=0.1, v=0.2),
        steer=GainSet(p=50.0, i=0.5, d=2.0),
    )


@pytest.fixture
def auto_profile():
    """Autonomous profile with steer motion constraints."""
    return GainProfile(
        drive=GainSet(p=2.0, i=0.01, d=0.0, v=0.3),
        steer=GainSet(p=80.0, i=1.0, d=4.0),
        steer_motion=MotionProfileConstraints(velocity=10.0, acceleration=50.0, jerk=500.0),
    )


@pytest.fixture
def gain_store(tele_profile, auto_profile):
    """Store starting in autonomous mode, no actuators attached."""
    return GainProfileStore({
        DriveMode.TELEOP: tele_profile,
        DriveMode.AUTONOMOUS: auto_profile,
    })


@pytest.fixture
def default_gain_store():
    """Store built from the static default gains."""
    return GainProfileStore.from_defaults(GainDefaults())


@pytest.fixture
def tuning_table():
    return TuningTable()


@pytest.fixture
def alert_sink(module_config):
    return LoggingAlertSink.for_module(*module_config.alert_ids())


@pytest.fixture
def swerve_module(drive_motor, steer_motor, encoder, gain_store,
                  module_config, motor_parameters, tuning_table, alert_sink):
    """Module wired to mock hardware with debug publishing enabled."""
    return SwerveModule(
        drive_motor,
        steer_motor,
        encoder,
        gain_store,
        module_config,
        motor_parameters,
        table=tuning_table,
        alert_sink=alert_sink,
        dash=Dash(tuning_table, test_mode=True),
    )
