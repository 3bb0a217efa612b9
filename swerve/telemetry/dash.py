"""
Dashboard Telemetry
===================

Key-value numeric store used for live tuning inputs and outbound debug
values, plus a debug logger that only publishes in test mode.

The dashboard transport itself (NetworkTables or similar) lives outside
this package; it reads and writes the TuningTable from its own thread.
"""

import threading
from typing import Dict, List, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from ..state import ModuleState

logger = logging.getLogger(__name__)


class TuningTable:
    """Thread-safe in-memory key → float store. Never blocks on I/O."""

    def __init__(self):
        self._values: Dict[str, float] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: float) -> float:
        """Value for key, or default if the key was never set."""
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: float):
        with self._lock:
            self._values[key] = float(value)

    def discard(self, key: str):
        """Remove key if present."""
        with self._lock:
            self._values.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._values)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def contains(self, key: str) -> bool:
        return key in self


class Dash:
    """
    Debug publisher over a TuningTable.

    Values are only written when test_mode is on, so competition builds
    carry no per-cycle telemetry cost.
    """

    def __init__(self, table: TuningTable, test_mode: bool = False):
        self.table = table
        self.test_mode = test_mode

    def log(self, key: str, value: float):
        """Publish a value if in test mode."""
        if self.test_mode:
            self.table.set(key, value)

    def log_bool(self, key: str, value: bool):
        self.log(key, 1.0 if value else 0.0)

    def log_state(self, prefix: str, state: 'ModuleState'):
        """Publish '<prefix> speed' and '<prefix> angle'."""
        self.log(f"{prefix} speed", state.speed)
        self.log(f"{prefix} angle", state.angle)
