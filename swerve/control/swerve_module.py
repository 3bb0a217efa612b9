"""
Swerve Module
=============

Facade for one swerve module: estimator, optimizer, gain profiles and
fault monitor wired to injected hardware.

Per cycle (called by the robot loop):
    1. position = estimator.refresh()
    2. optimized = optimize(desired, position.angle)
    3. steer  <- position setpoint  optimized.angle / 360   (rotations)
       drive  <- velocity setpoint  optimized.speed in rotor rotations/s
    4. faults = fault_monitor.check()

Everything runs synchronously on the caller's thread.
"""

from typing import Optional, Iterable, TYPE_CHECKING
import logging

from ..state import ModulePosition, ModuleState
from ..sensors.state_estimator import StateEstimator
from ..telemetry.dash import Dash, TuningTable
from .fault_monitor import AlertSink, FaultMonitor, FaultState, LoggingAlertSink
from .gains import ActuatorRole, DriveMode, GainProfileStore, GainSet
from .optimizer import optimize

if TYPE_CHECKING:
    from ..config import ModuleConfig, MotorParameters
    from .actuator_interface import MotorController, AbsoluteEncoder

logger = logging.getLogger(__name__)


class SwerveModule:
    """
    One independently steered, independently driven wheel.

    Args:
        drive: Drive motor
        steer: Steer motor (closed loop on the absolute encoder)
        encoder: Absolute steering angle sensor
        gain_store: Gain profiles, possibly shared with other modules
        config: Device IDs and calibration for this module
        parameters: Gear ratios and wheel size
        table: Tuning table for live gains and debug values
        alert_sink: Receives fault flags (defaults to logging alerts)
        dash: Debug publisher (defaults to a disabled Dash on table)
    """

    def __init__(self,
                 drive: 'MotorController',
                 steer: 'MotorController',
                 encoder: 'AbsoluteEncoder',
                 gain_store: GainProfileStore,
                 config: 'ModuleConfig',
                 parameters: 'MotorParameters',
                 table: Optional[TuningTable] = None,
                 alert_sink: Optional[AlertSink] = None,
                 dash: Optional[Dash] = None):
        self.drive = drive
        self.steer = steer
        self.encoder = encoder
        self.gain_store = gain_store
        self.config = config
        self.parameters = parameters
        self.table = table or TuningTable()
        self.dash = dash or Dash(self.table)

        self.estimator = StateEstimator(drive, encoder, parameters)
        if alert_sink is None:
            alert_sink = LoggingAlertSink.for_module(*config.alert_ids())
        self.fault_monitor = FaultMonitor(drive, steer, encoder, alert_sink)

        self._state = ModuleState()
        self._position = ModulePosition()

        gain_store.attach(drive, steer)
        gain_store.apply_profile(gain_store.mode)
        gain_store.publish_to_table(self.table)

        logger.info(
            f"Swerve module {self.module_id} ready "
            f"(drive={config.drive_id}, steer={config.steer_id}, encoder={config.encoder_id})"
        )

    @property
    def module_id(self) -> int:
        """Identifier used in logs and dashboard keys."""
        return self.config.encoder_id

    @property
    def commanded_state(self) -> ModuleState:
        """Optimized state sent on the last set_state()."""
        return self._state

    @property
    def position(self) -> ModulePosition:
        """Position from the last refresh."""
        return self._position

    def get_position(self) -> ModulePosition:
        """Refresh and return the module position."""
        self._position = self.estimator.refresh()
        return self._position

    def get_state(self) -> ModuleState:
        """Measured wheel speed and absolute steering angle."""
        return self.estimator.current_speed_and_angle()

    def set_state(self, desired: ModuleState) -> ModuleState:
        """
        Drive the module toward a desired state.

        The position is refreshed first, so the optimizer sees the angle
        from the start of this call.

        Args:
            desired: Requested speed (m/s) and angle (degrees)

        Returns:
            The optimized state that was sent
        """
        position = self.get_position()
        optimized = optimize(desired, position.angle)

        angle_to_set = optimized.angle / 360.0
        velocity_to_set = self.estimator.speed_to_rotor_velocity(optimized.speed)
        self.steer.set_position_setpoint(angle_to_set)
        self.drive.set_velocity_setpoint(velocity_to_set)

        self._state = optimized

        self.dash.log(f"drive set speed {self.module_id}", velocity_to_set)
        self.dash.log(f"steer set angle {self.module_id}", angle_to_set)
        self.dash.log(f"steer actual angle {self.module_id}", position.angle)
        self.dash.log_state(f"desired state after optimize {self.module_id}", optimized)

        return optimized

    def stop(self):
        """Neutral output on both motors, bypassing optimization."""
        self.steer.stop()
        self.drive.stop()
        self._state = ModuleState(speed=0.0, angle=self._state.angle)

    def reset_drive_position(self):
        """Zero the drive distance."""
        self.drive.set_rotor_position(0.0)
        self._position = ModulePosition(distance=0.0, angle=self._position.angle)

    def set_mode(self, mode: DriveMode):
        """Apply the gain profile for an operating mode and reseed the table."""
        self.gain_store.apply_profile(mode)
        self.gain_store.publish_to_table(self.table)

    def stage_tuning(self, role: ActuatorRole, **values: float):
        self.gain_store.stage_tuning(role, **values)

    def commit_tuning(self, role: ActuatorRole,
                      mode: Optional[DriveMode] = None) -> GainSet:
        return self.gain_store.commit_tuning(role, mode)

    def update_tuning_from_table(
            self, roles: Iterable[ActuatorRole] = (ActuatorRole.DRIVE, ActuatorRole.STEER)):
        """Stage live gains from the tuning table, then commit each role."""
        for role in roles:
            self.gain_store.stage_from_table(role, self.table)
            self.gain_store.commit_tuning(role)

    def check_faults(self) -> FaultState:
        return self.fault_monitor.check()

    def periodic(self) -> FaultState:
        """
        Housekeeping pass for cycles without a new command.

        Returns:
            FaultState from this cycle
        """
        position = self.get_position()
        faults = self.check_faults()

        measured = self.get_state()
        self.dash.log_state(f"module {self.module_id} measured", measured)
        self.dash.log(f"module {self.module_id} distance", position.distance)
        self.dash.log_bool(f"module {self.module_id} fault", faults.any_active)

        return faults
