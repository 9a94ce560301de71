import datetime

from moontide.ephemeris.phase import compute_moon_phase
from moontide.ephemeris.time import to_utc
from moontide.ephemeris.topocentric import compute_topocentric
from moontide.tides.estimator import (
    compute_tidal_range,
    compute_tidal_state,
    moon_cycle_angle,
    sun_cycle_angle,
)
from moontide.types import (
    ClockReading,
    CoordinateOffset,
    GeoCoordinate,
    PrecisionTier,
    ReferencePoint,
)


def evaluate(
    instant: datetime.datetime,
    coordinate: GeoCoordinate,
    selector=None,
    tier: PrecisionTier | str = PrecisionTier.SIMPLE,
    tz: datetime.tzinfo | str | None = None,
) -> ClockReading:
    """Compute every reading for a single instant.

    All readings share the same `instant`, so a caller that re-evaluates on
    each tick never mixes values from two different moments. When `selector`
    is omitted the tide is estimated from the observer's own longitude.
    """
    instant = to_utc(instant)
    tier = PrecisionTier.parse(tier)
    if selector is None:
        selector = CoordinateOffset(coordinate)
    topocentric = None
    if tier is PrecisionTier.PRECISE:
        topocentric = compute_topocentric(instant, coordinate)
    return ClockReading(
        instant=instant,
        coordinate=coordinate,
        phase=compute_moon_phase(instant, tier),
        tidal_state=compute_tidal_state(instant, selector),
        tidal_range=compute_tidal_range(instant, tz),
        moon_cycle_angle_deg=moon_cycle_angle(instant),
        sun_cycle_angle_deg=sun_cycle_angle(instant, tz),
        topocentric=topocentric,
        reference_point=selector if isinstance(selector, ReferencePoint) else None,
    )
