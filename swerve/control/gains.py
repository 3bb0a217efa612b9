"""
Gain Profile Store
==================

Closed-loop gain sets for the drive and steer actuators, keyed by
operating mode, with a two-phase (stage, then commit) tuning path.

Mode switching:
    apply_profile(mode) pushes the drive and steer GainSets for the mode
    to every attached actuator.

Live tuning:
    stage_tuning(role, p=..., d=...)   - record candidate terms, no effect
    commit_tuning(role)                - swap in one new GainSet, then push

GainSets are immutable. A commit replaces the whole set with one
assignment, so any reader sees either the old terms or the new ones.
"""

from dataclasses import dataclass, replace, fields
from enum import Enum, auto
from typing import Optional, Dict, List, Mapping, Tuple, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from ..config import GainDefaults
    from ..telemetry.dash import TuningTable
    from .actuator_interface import MotorController

logger = logging.getLogger(__name__)


class GainNotConfiguredError(LookupError):
    """Raised when an optional feedforward term is read but was never set."""


class DriveMode(Enum):
    """Robot operating modes with distinct gain profiles."""
    TELEOP = auto()
    AUTONOMOUS = auto()


class ActuatorRole(Enum):
    """Actuators on a swerve module that carry gains."""
    DRIVE = "Drive"
    STEER = "Steer"


# Tunable term names, in dashboard order
GAIN_TERMS: Tuple[str, ...] = ("p", "i", "d", "v", "s", "g")


@dataclass(frozen=True)
class GainSet:
    """
    PID gains with optional feedforward terms.

    Attributes:
        p, i, d: Proportional, integral, derivative gains
        v: Velocity feedforward (optional)
        s: Static feedforward (optional)
        g: Gravity feedforward (optional)
    """
    p: float
    i: float
    d: float
    v: Optional[float] = None
    s: Optional[float] = None
    g: Optional[float] = None

    @property
    def velocity_gain(self) -> float:
        """Velocity feedforward; raises GainNotConfiguredError if unset."""
        if self.v is None:
            raise GainNotConfiguredError("Velocity gain not set")
        return self.v

    @property
    def static_gain(self) -> float:
        """Static feedforward; raises GainNotConfiguredError if unset."""
        if self.s is None:
            raise GainNotConfiguredError("Static gain not set")
        return self.s

    @property
    def gravity_gain(self) -> float:
        """Gravity feedforward; raises GainNotConfiguredError if unset."""
        if self.g is None:
            raise GainNotConfiguredError("Gravity gain not set")
        return self.g

    def has_velocity_gain(self) -> bool:
        return self.v is not None

    def has_static_gain(self) -> bool:
        return self.s is not None

    def has_gravity_gain(self) -> bool:
        return self.g is not None

    def with_terms(self, **terms: float) -> 'GainSet':
        """
        Copy with several terms replaced at once.

        Raises:
            KeyError: If a term name is not one of p, i, d, v, s, g
        """
        _check_term_names(terms)
        return replace(self, **terms)

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class MotionProfileConstraints:
    """Velocity, acceleration and jerk limits for a motion-profiled move."""
    velocity: float
    acceleration: float
    jerk: float

    def validate(self):
        """
        Check that all limits are positive.

        Raises:
            ValueError: On the first non-positive limit
        """
        if self.velocity <= 0:
            raise ValueError(f"Velocity must be positive, got {self.velocity}")
        if self.acceleration <= 0:
            raise ValueError(f"Acceleration must be positive, got {self.acceleration}")
        if self.jerk <= 0:
            raise ValueError(f"Jerk must be positive, got {self.jerk}")

    def is_valid(self) -> bool:
        return self.velocity > 0 and self.acceleration > 0 and self.jerk > 0


@dataclass(frozen=True)
class GainProfile:
    """Drive and steer gains for one operating mode."""
    drive: GainSet
    steer: GainSet
    steer_motion: Optional[MotionProfileConstraints] = None

    def for_role(self, role: ActuatorRole) -> GainSet:
        if role == ActuatorRole.DRIVE:
            return self.drive
        return self.steer


def _check_term_names(terms: Mapping[str, float]):
    unknown = [name for name in terms if name not in GAIN_TERMS]
    if unknown:
        raise KeyError(f"Unknown gain terms: {', '.join(sorted(unknown))}")


def table_key(role: ActuatorRole, term: str) -> str:
    """Tuning table key for a term, e.g. 'Drive P'."""
    return f"{role.value} {term.upper()}"


class GainProfileStore:
    """
    Owns the gain profiles for every operating mode.

    One store may serve several modules: each module attaches its drive
    and steer actuators, and every apply or commit is pushed to all of
    them. No numeric validation is done on gain values.
    """

    def __init__(self, profiles: Mapping[DriveMode, GainProfile],
                 mode: DriveMode = DriveMode.AUTONOMOUS):
        missing = [m.name for m in DriveMode if m not in profiles]
        if missing:
            raise ValueError(f"No gain profile for mode(s): {', '.join(missing)}")

        self._profiles: Dict[DriveMode, GainProfile] = dict(profiles)
        self._mode = mode
        self._staged: Dict[ActuatorRole, Dict[str, float]] = {
            role: {} for role in ActuatorRole
        }
        self._actuators: Dict[ActuatorRole, List['MotorController']] = {
            role: [] for role in ActuatorRole
        }

    @classmethod
    def from_defaults(cls, defaults: 'GainDefaults',
                      mode: DriveMode = DriveMode.AUTONOMOUS) -> 'GainProfileStore':
        """Build a store from static default gains."""
        return cls({
            DriveMode.TELEOP: GainProfile(
                drive=defaults.drive_tele,
                steer=defaults.steer_tele,
                steer_motion=defaults.steer_motion,
            ),
            DriveMode.AUTONOMOUS: GainProfile(
                drive=defaults.drive_auto,
                steer=defaults.steer_auto,
                steer_motion=defaults.steer_motion,
            ),
        }, mode=mode)

    @property
    def mode(self) -> DriveMode:
        """Currently active operating mode."""
        return self._mode

    def attach(self, drive: 'MotorController', steer: 'MotorController'):
        """Register a module's actuators to receive gain updates."""
        self._actuators[ActuatorRole.DRIVE].append(drive)
        self._actuators[ActuatorRole.STEER].append(steer)

    def profile(self, mode: Optional[DriveMode] = None) -> GainProfile:
        return self._profiles[mode or self._mode]

    def gains(self, role: ActuatorRole, mode: Optional[DriveMode] = None) -> GainSet:
        """Get the stored GainSet for a role (active mode by default)."""
        return self.profile(mode).for_role(role)

    def apply_profile(self, mode: DriveMode):
        """
        Make mode active and push its gains to all attached actuators.

        Raises:
            ValueError: If the profile's steer motion constraints are invalid
        """
        profile = self._profiles[mode]
        if profile.steer_motion is not None:
            profile.steer_motion.validate()

        old_mode = self._mode
        self._mode = mode

        for drive in self._actuators[ActuatorRole.DRIVE]:
            drive.apply_gains(profile.drive)
        for steer in self._actuators[ActuatorRole.STEER]:
            steer.apply_gains(profile.steer)
            if profile.steer_motion is not None:
                steer.apply_motion_constraints(profile.steer_motion)

        logger.info(f"Gain profile: {old_mode.name} → {mode.name}")

    def stage_tuning(self, role: ActuatorRole, **values: float):
        """
        Record candidate gain terms without touching any actuator.

        Args:
            role: Actuator the terms belong to
            **values: Term name (p, i, d, v, s, g) to value

        Raises:
            KeyError: If a term name is unknown
        """
        _check_term_names(values)
        self._staged[role].update(values)
        logger.debug(f"Staged {role.value} gains: {values}")

    def stage_from_table(self, role: ActuatorRole, table: 'TuningTable'):
        """
        Stage terms for role from the tuning table.

        Configured terms default to their current value. An unset
        feedforward term is staged only once the table carries a key for it.
        """
        current = self.gains(role)
        values = {}
        for term in GAIN_TERMS:
            key = table_key(role, term)
            value = getattr(current, term)
            if value is not None:
                values[term] = table.get(key, value)
            elif key in table:
                values[term] = table.get(key, 0.0)
        self.stage_tuning(role, **values)

    def staged(self, role: ActuatorRole) -> Dict[str, float]:
        """Copy of the pending terms for role."""
        return dict(self._staged[role])

    def commit_tuning(self, role: ActuatorRole,
                      mode: Optional[DriveMode] = None) -> GainSet:
        """
        Apply all staged terms for role together.

        Args:
            role: Actuator whose staged terms are committed
            mode: Profile to update (defaults to the active mode)

        Returns:
            The GainSet now stored for role
        """
        mode = mode or self._mode
        staged = self._staged[role]
        if not staged:
            return self.gains(role, mode)

        profile = self._profiles[mode]
        new_gains = profile.for_role(role).with_terms(**staged)
        if role == ActuatorRole.DRIVE:
            self._profiles[mode] = replace(profile, drive=new_gains)
        else:
            self._profiles[mode] = replace(profile, steer=new_gains)
        self._staged[role] = {}

        if mode == self._mode:
            for actuator in self._actuators[role]:
                actuator.apply_gains(new_gains)

        logger.info(f"Committed {role.value} gains for {mode.name}: {new_gains}")
        return new_gains

    def publish_to_table(self, table: 'TuningTable'):
        """
        Seed the tuning table with the active gains.

        Configured terms are written and keys for unset terms are removed,
        so after a mode switch the table holds only the new mode's values.
        """
        for role in ActuatorRole:
            for term, value in self.gains(role).as_dict().items():
                if value is not None:
                    table.set(table_key(role, term), value)
                else:
                    table.discard(table_key(role, term))
