from dataclasses import dataclass
import datetime
import math

from moontide.types import GeoCoordinate, PrecisionTier
from .angles import clamp_unit, normalize_degrees, normalize_fraction
from .time import MS_PER_DAY, centuries_since_j2000, milliseconds_between, to_julian_date


SIMPLE_SYNODIC_MONTH_MS = PrecisionTier.SIMPLE.synodic_month_days * MS_PER_DAY


@dataclass(frozen=True)
class FundamentalArguments:
    """Mean lunar arguments in degrees (not reduced to [0, 360))."""

    mean_longitude: float
    mean_anomaly: float
    sun_mean_anomaly: float
    mean_elongation: float
    argument_of_latitude: float


def simple_phase(instant: datetime.datetime, coordinate: GeoCoordinate | None = None) -> float:
    """Phase in [0, 1) counted from a fixed new moon.

    `coordinate` is accepted for symmetry with the precise tier and has no
    effect on the result.
    """
    elapsed_ms = milliseconds_between(PrecisionTier.SIMPLE.reference_new_moon, instant)
    return normalize_fraction(elapsed_ms, SIMPLE_SYNODIC_MONTH_MS)


def fundamental_arguments(jd: float) -> FundamentalArguments:
    t = centuries_since_j2000(jd)
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t
    return FundamentalArguments(
        mean_longitude=218.3164477 + 481267.88123421 * t - 0.0015786 * t2 + t3 / 538841 - t4 / 65194000,
        mean_anomaly=134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699 - t4 / 14712000,
        sun_mean_anomaly=357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000,
        mean_elongation=297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868 - t4 / 113065000,
        argument_of_latitude=93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000 + t4 / 863310000,
    )


def precise_longitude(jd: float) -> float:
    """Geocentric ecliptic longitude of the Moon in degrees, [0, 360)."""
    args = fundamental_arguments(jd)
    m = math.radians(args.mean_anomaly)
    m1 = math.radians(args.sun_mean_anomaly)
    d = math.radians(args.mean_elongation)
    f = math.radians(args.argument_of_latitude)

    delta = (
        6.288774 * math.sin(m)
        + 1.274027 * math.sin(2 * d - m)
        + 0.658314 * math.sin(2 * d)
        + 0.213618 * math.sin(2 * m)
        - 0.185116 * math.sin(m1)
        - 0.114332 * math.sin(2 * f)
    )
    return normalize_degrees(args.mean_longitude + delta)


def ecliptic_latitude(jd: float) -> float:
    args = fundamental_arguments(jd)
    m = math.radians(args.mean_anomaly)
    d = math.radians(args.mean_elongation)
    f = math.radians(args.argument_of_latitude)
    return (
        5.128122 * math.sin(f)
        + 0.280602 * math.sin(m + f)
        + 0.277693 * math.sin(m - f)
        + 0.173237 * math.sin(2 * d - f)
    )


def obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic in degrees."""
    return 23.439291 - 0.0130042 * centuries_since_j2000(jd)


def ecliptic_to_equatorial(
    longitude_deg: float,
    latitude_deg: float,
    obliquity_deg: float,
) -> tuple[float, float]:
    """Return (right ascension in [0, 360), declination) in degrees."""
    lam = math.radians(longitude_deg)
    beta = math.radians(latitude_deg)
    eps = math.radians(obliquity_deg)
    sin_dec = math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
    dec = math.asin(clamp_unit(sin_dec))
    y = math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps)
    x = math.cos(lam)
    ra = math.atan2(y, x)
    return normalize_degrees(math.degrees(ra)), math.degrees(dec)


def declination(jd: float) -> float:
    _, dec = ecliptic_to_equatorial(precise_longitude(jd), ecliptic_latitude(jd), obliquity(jd))
    return dec


def right_ascension(jd: float) -> float:
    ra, _ = ecliptic_to_equatorial(precise_longitude(jd), ecliptic_latitude(jd), obliquity(jd))
    return ra


def precise_moon_phase(jd: float) -> float:
    """Phase in [0, 1) from days elapsed since the J2000-era reference new moon."""
    reference_jd = to_julian_date(PrecisionTier.PRECISE.reference_new_moon)
    return normalize_fraction(jd - reference_jd, PrecisionTier.PRECISE.synodic_month_days)
