"""
Telemetry
=========

Tuning inputs and debug outputs exchanged with the dashboard.
"""

from .dash import TuningTable, Dash

__all__ = [
    'TuningTable',
    'Dash',
]
