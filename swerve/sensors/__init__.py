"""
Sensor Modules
==============

Estimation of the swerve module position and state from raw readings.
"""

from .state_estimator import StateEstimator

__all__ = [
    'StateEstimator',
]
