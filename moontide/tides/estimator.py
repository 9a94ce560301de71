"""Heuristic tide clock.

Nothing here models tidal physics. The high/low state is read off a hand
that sweeps once per lunar day (about 24h50m), shifted by a per-port timing
offset, and the spring/neap range is read off the separation between that
hand and a solar hand that sweeps once per civil day. It mirrors a tide
clock dial, not a harmonic prediction.
"""
import datetime
from zoneinfo import ZoneInfo

from moontide.ephemeris.angles import circular_distance_deg, normalize_degrees
from moontide.ephemeris.time import to_utc, unix_microseconds
from moontide.types import (
    CoordinateOffset,
    GeoCoordinate,
    NamedOffset,
    ReferencePoint,
    ReferenceSelector,
    TidalRange,
    TidalRangeReading,
    TidalStateReading,
    TideState,
)

DEFAULT_TIMEZONE = "Asia/Seoul"

LUNAR_DAY_SECONDS = 89428.3285
LUNAR_DAY_MS = LUNAR_DAY_SECONDS * 1000
_LUNAR_DAY_US = 89428328500

# Local clock time the solar hand treats as "true south".
SOLAR_REFERENCE_MINUTES = 13 * 60
MINUTES_PER_DAY = 24 * 60

# Standard meridian for the longitude based offset approximation.
REFERENCE_MERIDIAN_DEG = 135.0
MINUTES_PER_DEGREE = 4.0

_CARDINAL_ANGLES = (0.0, 90.0, 180.0, 270.0)
_HIGH_TIDE_ANGLES = (90.0, 270.0)

_SPRING_MAX_DEG = 30.0
_SPRING_MIN_DEG = 150.0
_NEAP_MIN_DEG = 60.0
_NEAP_MAX_DEG = 120.0


def _resolve_tz(tz: datetime.tzinfo | str | None) -> datetime.tzinfo:
    if tz is None:
        return ZoneInfo(DEFAULT_TIMEZONE)
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def moon_cycle_angle(instant: datetime.datetime) -> float:
    """Angle of the lunar-day hand in [0, 360)."""
    elapsed = unix_microseconds(instant) % _LUNAR_DAY_US
    return normalize_degrees(elapsed / _LUNAR_DAY_US * 360.0)


def sun_cycle_angle(instant: datetime.datetime, tz: datetime.tzinfo | str | None = None) -> float:
    """Angle of the solar hand in [0, 360); 13:00 local time is 0."""
    local = to_utc(instant).astimezone(_resolve_tz(tz))
    seconds = local.second + local.microsecond / 1e6
    total_minutes = local.hour * 60 + local.minute + seconds / 60.0
    offset = (total_minutes - SOLAR_REFERENCE_MINUTES) % MINUTES_PER_DAY
    return normalize_degrees(offset / MINUTES_PER_DAY * 360.0)


def offset_to_degrees(offset_minutes: float) -> float:
    # Minutes over the lunar day in seconds; port offsets move the hand by
    # less than one degree.
    return offset_minutes / LUNAR_DAY_SECONDS * 360.0


def longitude_offset_minutes(longitude_deg: float) -> float:
    return (longitude_deg - REFERENCE_MERIDIAN_DEG) * MINUTES_PER_DEGREE


def selector_offset_minutes(selector) -> float:
    if isinstance(selector, NamedOffset):
        return selector.offset_minutes
    if isinstance(selector, ReferencePoint):
        return selector.offset_minutes
    if isinstance(selector, CoordinateOffset):
        return longitude_offset_minutes(selector.coordinate.longitude_deg)
    if isinstance(selector, GeoCoordinate):
        return longitude_offset_minutes(selector.longitude_deg)
    raise TypeError(f"Unsupported reference selector: {type(selector).__name__}")


def tidal_state(instant: datetime.datetime, offset_minutes: float = 0.0) -> TidalStateReading:
    adjusted = normalize_degrees(moon_cycle_angle(instant) + offset_to_degrees(offset_minutes))
    distances = [circular_distance_deg(adjusted, a) for a in _CARDINAL_ANGLES]
    min_dist = min(distances)
    nearest = _CARDINAL_ANGLES[distances.index(min_dist)]
    state = TideState.HIGH if nearest in _HIGH_TIDE_ANGLES else TideState.LOW
    return TidalStateReading(
        state=state,
        intensity=100.0 - min_dist,
        adjusted_angle_deg=adjusted,
        offset_minutes=offset_minutes,
    )


def tidal_range(instant: datetime.datetime, tz: datetime.tzinfo | str | None = None) -> TidalRangeReading:
    separation = circular_distance_deg(moon_cycle_angle(instant), sun_cycle_angle(instant, tz))
    if separation < _SPRING_MAX_DEG or separation > _SPRING_MIN_DEG:
        kind = TidalRange.SPRING
    elif _NEAP_MIN_DEG < separation < _NEAP_MAX_DEG:
        kind = TidalRange.NEAP
    else:
        kind = TidalRange.INTERMEDIATE
    return TidalRangeReading(range=kind, separation_deg=separation)


def compute_tidal_state(
    instant: datetime.datetime,
    selector: ReferenceSelector | ReferencePoint | GeoCoordinate,
) -> TidalStateReading:
    """High/low estimate for a `NamedOffset`, `CoordinateOffset`,
    `ReferencePoint` or bare `GeoCoordinate`."""
    return tidal_state(instant, selector_offset_minutes(selector))


def compute_tidal_range(instant: datetime.datetime, tz: datetime.tzinfo | str | None = None) -> TidalRangeReading:
    return tidal_range(instant, tz)
