"""
Fault Monitor
=============

Connectivity faults for the drive motor, steer motor and absolute
encoder of one swerve module.

Each check() queries the live connectivity flag of every component and
reports fault = not connected. There is no debounce and no history: a
single missed read raises the fault and the next good read clears it.

Faults are not exceptions. The module keeps sending setpoints while a
fault is active.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Dict, Mapping, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .actuator_interface import MotorController, AbsoluteEncoder

logger = logging.getLogger(__name__)


class ComponentId(Enum):
    """Monitored components of a swerve module."""
    DRIVE = "drive"
    STEER = "steer"
    ENCODER = "encoder"


class AlertSeverity(IntEnum):
    INFO = 0
    WARNING = 1
    ERROR = 2


@dataclass
class Alert:
    """Operator-visible alert. Constructing one has no side effects."""
    text: str
    severity: AlertSeverity = AlertSeverity.ERROR
    active: bool = False


@dataclass(frozen=True)
class FaultState:
    """Fault flags for one module (True = faulted)."""
    drive: bool = False
    steer: bool = False
    encoder: bool = False

    @property
    def any_active(self) -> bool:
        return self.drive or self.steer or self.encoder

    def as_dict(self) -> Dict[ComponentId, bool]:
        return {
            ComponentId.DRIVE: self.drive,
            ComponentId.STEER: self.steer,
            ComponentId.ENCODER: self.encoder,
        }


class AlertSink(ABC):
    """Receives fault flags from the monitor."""

    @abstractmethod
    def set_active(self, component_id: ComponentId, active: bool):
        """Raise or clear the alert for a component."""


class LoggingAlertSink(AlertSink):
    """Holds one Alert per component and logs raise/clear transitions."""

    def __init__(self, alerts: Mapping[ComponentId, Alert]):
        self.alerts: Dict[ComponentId, Alert] = dict(alerts)

    @classmethod
    def for_module(cls, drive_id: int, steer_id: int,
                   encoder_id: int) -> 'LoggingAlertSink':
        """Build the disconnect alerts for one module's devices."""
        return cls({
            ComponentId.DRIVE: Alert(f"Disconnected drive motor {drive_id}."),
            ComponentId.STEER: Alert(f"Disconnected turn motor {steer_id}."),
            ComponentId.ENCODER: Alert(f"Disconnected CANcoder {encoder_id}."),
        })

    def set_active(self, component_id: ComponentId, active: bool):
        alert = self.alerts.get(component_id)
        if alert is None or alert.active == active:
            return

        alert.active = active
        if active:
            if alert.severity >= AlertSeverity.ERROR:
                logger.error(alert.text)
            elif alert.severity == AlertSeverity.WARNING:
                logger.warning(alert.text)
            else:
                logger.info(alert.text)
        else:
            logger.info(f"Cleared: {alert.text}")

    def active_alerts(self) -> Dict[ComponentId, Alert]:
        return {cid: a for cid, a in self.alerts.items() if a.active}


class FaultMonitor:
    """
    Recomputes FaultState from live connectivity on every check.

    Args:
        drive: Drive motor
        steer: Steer motor
        encoder: Absolute angle sensor
        sink: Optional alert sink updated on every check
    """

    def __init__(self, drive: 'MotorController', steer: 'MotorController',
                 encoder: 'AbsoluteEncoder', sink: Optional[AlertSink] = None):
        self.drive = drive
        self.steer = steer
        self.encoder = encoder
        self.sink = sink
        self._last_state = FaultState()

    def check(self) -> FaultState:
        """
        Query connectivity of every component.

        Returns:
            FaultState with fault = not connected per component
        """
        state = FaultState(
            drive=not self.drive.is_connected(),
            steer=not self.steer.is_connected(),
            encoder=not self.encoder.is_connected(),
        )

        if self.sink is not None:
            for component_id, active in state.as_dict().items():
                self.sink.set_active(component_id, active)

        self._last_state = state
        return state

    @property
    def last_state(self) -> FaultState:
        """Result of the most recent check()."""
        return self._last_state
