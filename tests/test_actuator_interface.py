"""
Unit tests for the actuator interface mocks.

Tests mock motor and encoder behavior and the default hooks on the
abstract interface.
"""

from unittest.mock import Mock

import pytest

from swerve.control.actuator_interface import (
    AbsoluteEncoder, ControlRequest, MockAbsoluteEncoder, MockMotorController,
    MotorCommand, MotorController,
)
from swerve.control.fault_monitor import AlertSink, ComponentId, FaultMonitor
from swerve.control.gains import GainSet, MotionProfileConstraints


class TestMockMotorController:
    """Tests for MockMotorController."""

    def test_records_commands(self):
        """Setpoints should be recorded in order."""
        motor = MockMotorController(device_id=5)

        motor.set_position_setpoint(0.25)
        motor.set_velocity_setpoint(-3.0)

        assert motor.commands == [
            MotorCommand(ControlRequest.POSITION, 0.25),
            MotorCommand(ControlRequest.VELOCITY, -3.0),
        ]
        assert motor.last_command.value == -3.0

    def test_no_commands(self):
        assert MockMotorController().last_command is None

    def test_stop(self):
        motor = MockMotorController()

        motor.stop()

        assert motor.last_command.request == ControlRequest.NEUTRAL
        assert motor.stop_count == 1

    def test_rotor_position(self):
        motor = MockMotorController()
        motor.rotor_position = 12.0

        motor.set_rotor_position(0.0)

        assert motor.get_rotor_position() == 0.0

    def test_gain_history(self):
        motor = MockMotorController()
        first = GainSet(p=1.0, i=0.0, d=0.0)
        second = first.with_terms(p=2.0)

        motor.apply_gains(first)
        motor.apply_gains(second)

        assert motor.gains == second
        assert motor.gain_history == [first, second]


class TestMockAbsoluteEncoder:
    """Tests for MockAbsoluteEncoder."""

    def test_reading(self):
        encoder = MockAbsoluteEncoder(device_id=9, rotations=-0.25)

        assert encoder.get_absolute_angle() == -0.25
        assert encoder.is_connected()

    def test_disconnect(self):
        encoder = MockAbsoluteEncoder()
        encoder.connected = False

        assert not encoder.is_connected()


class TestInterfaceDefaults:
    """Tests for the abstract interface."""

    def test_abstract(self):
        with pytest.raises(TypeError):
            MotorController()
        with pytest.raises(TypeError):
            AbsoluteEncoder()

    def test_motion_constraints_optional(self):
        """Motors without profiling should accept and ignore constraints."""

        class BareMotor(MotorController):
            def set_position_setpoint(self, rotations): pass
            def set_velocity_setpoint(self, rotations_per_second): pass
            def get_rotor_position(self): return 0.0
            def get_rotor_velocity(self): return 0.0
            def set_rotor_position(self, rotations): pass
            def is_connected(self): return True
            def apply_gains(self, gains): pass
            def stop(self): pass

        BareMotor().apply_motion_constraints(
            MotionProfileConstraints(velocity=1.0, acceleration=1.0, jerk=1.0)
        )

    def test_monitor_with_mock_sink(self):
        """Any AlertSink implementation should receive fault flags."""
        sink = Mock(spec=AlertSink)
        drive = MockMotorController(1)
        drive.connected = False

        FaultMonitor(drive, MockMotorController(2), MockAbsoluteEncoder(9), sink).check()

        sink.set_active.assert_any_call(ComponentId.DRIVE, True)
        sink.set_active.assert_any_call(ComponentId.STEER, False)
        assert sink.set_active.call_count == 3

