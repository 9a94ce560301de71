import math


def normalize_degrees(angle: float) -> float:
    """Reduce an angle to [0, 360)."""
    angle = math.fmod(angle, 360.0)
    if angle < 0.0:
        angle += 360.0
    # fmod of a tiny negative value plus 360 rounds to 360 exactly.
    if angle >= 360.0:
        angle -= 360.0
    return angle


def normalize_signed_degrees(angle: float) -> float:
    """Reduce an angle to (-180, 180]."""
    angle = normalize_degrees(angle)
    if angle > 180.0:
        angle -= 360.0
    return angle


def normalize_fraction(value: float, period: float) -> float:
    """Return `value mod period` as a fraction of the period in [0, 1)."""
    fraction = math.fmod(value, period) / period
    if fraction < 0.0:
        fraction += 1.0
    if fraction >= 1.0:
        fraction -= 1.0
    return fraction


def circular_distance_deg(a: float, b: float) -> float:
    """Shortest distance between two angles, in [0, 180]."""
    diff = abs(normalize_degrees(a) - normalize_degrees(b))
    return min(diff, 360.0 - diff)


def clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))
