"""
Swerve Module Demo
==================

Drives one simulated swerve module from a synthetic joystick sweep at a
fixed loop period, logging position and faults.

Usage:
    python -m swerve.main --duration 5 --rate 50 --disconnect-drive-at 2.5
"""

import argparse
import logging
import math
import signal
import sys
import time
from dataclasses import dataclass, field
from typing import Optional

from .config import DashboardConfig, GainDefaults, ModuleConfig, MotorParameters
from .control.fault_monitor import ComponentId
from .control.gains import DriveMode, GainProfileStore
from .control.swerve_module import SwerveModule
from .simulation.module_sim import ModuleSimConfig, SimulatedModuleHardware
from .state import ModuleState
from .telemetry.dash import Dash, TuningTable
from .utils.math_utils import apply_deadband, scale_range

logger = logging.getLogger(__name__)


@dataclass
class DemoConfig:
    """Demo run configuration."""
    duration_s: float = 5.0
    rate_hz: float = 50.0
    max_speed: float = 4.0               # m/s at full stick
    stick_deadband: float = 0.05
    sweep_period_s: float = 4.0          # one full stick revolution
    realtime: bool = False               # sleep to hold the loop period
    disconnect_drive_at: Optional[float] = None
    mode: DriveMode = DriveMode.TELEOP

    module: ModuleConfig = field(default_factory=lambda: ModuleConfig(1, 2, 9))
    parameters: MotorParameters = field(default_factory=MotorParameters)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    sim: ModuleSimConfig = field(default_factory=ModuleSimConfig)


class SwerveModuleDemo:
    """Fixed-period loop around one simulated module."""

    def __init__(self, config: Optional[DemoConfig] = None):
        self.config = config or DemoConfig()
        cfg = self.config

        self.hardware = SimulatedModuleHardware(
            cfg.module.drive_id, cfg.module.steer_id, cfg.module.encoder_id, cfg.sim
        )
        self.table = TuningTable()
        self.gain_store = GainProfileStore.from_defaults(GainDefaults(), mode=cfg.mode)
        self.module = SwerveModule(
            self.hardware.drive,
            self.hardware.steer,
            self.hardware.encoder,
            self.gain_store,
            cfg.module,
            cfg.parameters,
            table=self.table,
            dash=Dash(self.table, test_mode=cfg.dashboard.test_mode),
        )

        self._running = False
        self._loop_count = 0
        self._fault_cycles = 0

    def joystick(self, t: float) -> ModuleState:
        """Desired state from a stick sweeping a circle with varying throw."""
        phase = 2 * math.pi * t / self.config.sweep_period_s
        throw = 0.5 + 0.5 * math.sin(phase / 3)
        x = apply_deadband(throw * math.cos(phase), self.config.stick_deadband)
        y = apply_deadband(throw * math.sin(phase), self.config.stick_deadband)

        magnitude = min(1.0, math.hypot(x, y))
        speed = scale_range(magnitude, 0.0, 1.0, 0.0, self.config.max_speed)
        angle = math.degrees(math.atan2(y, x))
        return ModuleState(speed=speed, angle=angle)

    def run(self) -> dict:
        """
        Run the loop for the configured duration.

        Returns:
            Run statistics
        """
        cfg = self.config
        dt = 1.0 / cfg.rate_hz
        steps = int(cfg.duration_s * cfg.rate_hz)
        self._running = True

        logger.info(f"Running {steps} cycles at {cfg.rate_hz:.0f}Hz in {cfg.mode.name}")

        for step in range(steps):
            if not self._running:
                break
            t = step * dt
            loop_start = time.time()

            if (cfg.disconnect_drive_at is not None
                    and self.hardware.drive.connected and t >= cfg.disconnect_drive_at):
                self.hardware.set_connected(ComponentId.DRIVE, False)

            self.module.set_state(self.joystick(t))
            faults = self.module.check_faults()
            if faults.any_active:
                self._fault_cycles += 1

            self.hardware.step(dt)
            self._loop_count += 1

            if self._loop_count % int(cfg.rate_hz) == 0:
                position = self.module.position
                logger.info(
                    f"t={t:.2f}s distance={position.distance:.3f}m "
                    f"angle={position.angle:.1f}° faults={faults.any_active}"
                )

            if cfg.realtime:
                remaining = dt - (time.time() - loop_start)
                if remaining > 0:
                    time.sleep(remaining)

        self.stop()
        return self.stats

    def stop(self):
        """Stop the loop and neutral the module."""
        self._running = False
        self.module.stop()
        logger.info("Swerve module stopped")

    @property
    def stats(self) -> dict:
        return {
            "loop_count": self._loop_count,
            "fault_cycles": self._fault_cycles,
            "distance_m": self.module.position.distance,
        }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulated swerve module demo")
    parser.add_argument("--duration", "-d", type=float, default=5.0,
                        help="Run time in seconds")
    parser.add_argument("--rate", "-r", type=float, default=50.0,
                        help="Control loop rate (Hz)")
    parser.add_argument("--speed", type=float, default=4.0,
                        help="Speed at full stick (m/s)")
    parser.add_argument("--auto", action="store_true",
                        help="Use autonomous gains instead of teleop")
    parser.add_argument("--disconnect-drive-at", type=float, default=None,
                        help="Simulate a drive motor disconnect at this time (s)")
    parser.add_argument("--realtime", action="store_true",
                        help="Hold the loop period with sleeps")
    parser.add_argument("--test-mode", action="store_true",
                        help="Publish per-cycle debug values")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = DemoConfig(
        duration_s=args.duration,
        rate_hz=args.rate,
        max_speed=args.speed,
        realtime=args.realtime,
        disconnect_drive_at=args.disconnect_drive_at,
        mode=DriveMode.AUTONOMOUS if args.auto else DriveMode.TELEOP,
        dashboard=DashboardConfig(test_mode=args.test_mode),
    )
    demo = SwerveModuleDemo(config)

    def signal_handler(sig, frame):
        logger.info("Shutdown signal received")
        demo.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    stats = demo.run()
    logger.info(f"Done: {stats}")


if __name__ == "__main__":
    main()
