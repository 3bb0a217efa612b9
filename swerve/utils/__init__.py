"""
Shared numeric helpers.
"""

from .math_utils import (
    wrap_degrees,
    normalize_degrees,
    normalize_radians,
    angular_distance_degrees,
    angular_distance,
    clamp,
    apply_deadband,
    scale_range,
    lerp,
    epsilon_equals,
)

__all__ = [
    'wrap_degrees',
    'normalize_degrees',
    'normalize_radians',
    'angular_distance_degrees',
    'angular_distance',
    'clamp',
    'apply_deadband',
    'scale_range',
    'lerp',
    'epsilon_equals',
]
