"""
Math Utilities
==============

Small numeric helpers shared by the swerve module code.

Angle conventions:
    - Wrapped angles live in [0, 360) degrees
    - Signed angle differences live in (-180, 180] degrees
"""

import math


def wrap_degrees(angle: float) -> float:
    """
    Wrap an angle into [0, 360) degrees.

    Total for any finite input, including negative values and exact
    multiples of 360.
    """
    wrapped = math.fmod(angle, 360.0)
    if wrapped < 0.0:
        wrapped += 360.0
    # -1e-20 + 360.0 rounds to 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def normalize_degrees(angle: float) -> float:
    """Normalize an angle into (-180, 180] degrees."""
    normalized = wrap_degrees(angle)
    if normalized > 180.0:
        normalized -= 360.0
    return normalized


def normalize_radians(angle: float) -> float:
    """Normalize an angle into (-pi, pi] radians."""
    normalized = math.fmod(angle, 2 * math.pi)
    if normalized <= -math.pi:
        normalized += 2 * math.pi
    elif normalized > math.pi:
        normalized -= 2 * math.pi
    return normalized


def angular_distance_degrees(from_angle: float, to_angle: float) -> float:
    """
    Signed shortest rotation from one angle to another.

    Args:
        from_angle: Starting angle (degrees)
        to_angle: Target angle (degrees)

    Returns:
        Rotation in (-180, 180] degrees; positive is counter-clockwise
    """
    return normalize_degrees(to_angle - from_angle)


def angular_distance(from_angle: float, to_angle: float) -> float:
    """Signed shortest rotation in radians, in (-pi, pi]."""
    return normalize_radians(to_angle - from_angle)


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value to [minimum, maximum]."""
    return max(minimum, min(maximum, value))


def apply_deadband(value: float, deadband: float) -> float:
    """Return 0.0 for values inside the deadband, value otherwise."""
    return value if abs(value) > abs(deadband) else 0.0


def scale_range(value: float, from_min: float, from_max: float,
                to_min: float, to_max: float) -> float:
    """Linearly map value from [from_min, from_max] onto [to_min, to_max]."""
    scaled = (value - from_min) / (from_max - from_min)
    return to_min + scaled * (to_max - to_min)


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between start and end."""
    return start + t * (end - start)


def epsilon_equals(a: float, b: float, epsilon: float = 1e-9) -> bool:
    """Check if two values are equal within epsilon."""
    return abs(a - b) < epsilon
