"""
Unit tests for the tuning table and Dash debug publisher.
"""

import threading

from swerve.state import ModuleState
from swerve.telemetry.dash import Dash, TuningTable


class TestTuningTable:
    """Tests for TuningTable."""

    def test_default_when_missing(self, tuning_table):
        assert tuning_table.get("Drive P", 1.5) == 1.5
        assert not tuning_table.contains("Drive P")

    def test_set_and_get(self, tuning_table):
        tuning_table.set("Drive P", 2)

        assert tuning_table.get("Drive P", 0.0) == 2.0
        assert isinstance(tuning_table.get("Drive P", 0.0), float)
        assert "Drive P" in tuning_table

    def test_discard(self, tuning_table):
        """discard should remove a key and ignore missing ones."""
        tuning_table.set("Steer V", 0.0)

        tuning_table.discard("Steer V")
        tuning_table.discard("Steer V")

        assert "Steer V" not in tuning_table

    def test_keys_sorted(self, tuning_table):
        for key in ("b", "c", "a"):
            tuning_table.set(key, 0.0)

        assert tuning_table.keys() == ["a", "b", "c"]

    def test_concurrent_writers(self, tuning_table):
        """Writes from several threads should all land."""
        def writer(n):
            for i in range(200):
                tuning_table.set(f"w{n} {i}", float(i))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(tuning_table.keys()) == 800


class TestDash:
    """Tests for Dash."""

    def test_disabled_outside_test_mode(self, tuning_table):
        dash = Dash(tuning_table)

        dash.log("x", 1.0)
        dash.log_bool("flag", True)

        assert tuning_table.keys() == []

    def test_log_in_test_mode(self, tuning_table):
        dash = Dash(tuning_table, test_mode=True)

        dash.log("x", 1.25)

        assert tuning_table.get("x", 0.0) == 1.25

    def test_log_bool(self, tuning_table):
        dash = Dash(tuning_table, test_mode=True)

        dash.log_bool("on", True)
        dash.log_bool("off", False)

        assert tuning_table.get("on", -1.0) == 1.0
        assert tuning_table.get("off", -1.0) == 0.0

    def test_log_state(self, tuning_table):
        dash = Dash(tuning_table, test_mode=True)

        dash.log_state("wheel", ModuleState(speed=-2.0, angle=400.0))

        assert tuning_table.get("wheel speed", 0.0) == -2.0
        assert tuning_table.get("wheel angle", 0.0) == 40.0


def test_module_state_wraps_angle():
    """ModuleState angles should always be canonical."""
    assert ModuleState(speed=1.0, angle=-90.0).angle == 270.0
    assert ModuleState(speed=1.0, angle=360.0).angle == 0.0
