import datetime
import math

from moontide.types import GeoCoordinate, TopocentricReading
from .angles import clamp_unit, normalize_degrees, normalize_signed_degrees
from .lunar import ecliptic_latitude, ecliptic_to_equatorial, obliquity, precise_longitude
from .time import J2000_JD, centuries_since_j2000, to_julian_date


def greenwich_sidereal_time(jd: float) -> float:
    t = centuries_since_j2000(jd)
    gmst = 280.46061837 + 360.98564736629 * (jd - J2000_JD) + 0.000387933 * t * t - t * t * t / 38710000
    return normalize_degrees(gmst)


def local_sidereal_time(jd: float, longitude_deg: float) -> float:
    return normalize_degrees(greenwich_sidereal_time(jd) + longitude_deg)


def hour_angle(lst_deg: float, ra_deg: float) -> float:
    """Hour angle in (-180, 180], positive west of the meridian."""
    return normalize_signed_degrees(lst_deg - ra_deg)


def altitude(latitude_deg: float, dec_deg: float, ha_deg: float) -> float:
    lat = math.radians(latitude_deg)
    dec = math.radians(dec_deg)
    ha = math.radians(ha_deg)
    sin_alt = math.sin(lat) * math.sin(dec) + math.cos(lat) * math.cos(dec) * math.cos(ha)
    return math.degrees(math.asin(clamp_unit(sin_alt)))


def azimuth(latitude_deg: float, dec_deg: float, ha_deg: float) -> float:
    """Azimuth measured from north through east, [0, 360)."""
    lat = math.radians(latitude_deg)
    dec = math.radians(dec_deg)
    ha = math.radians(ha_deg)
    az = math.atan2(
        math.sin(ha),
        math.cos(ha) * math.sin(lat) - math.tan(dec) * math.cos(lat),
    )
    # atan2 above is south-origin; rotate to a north-origin bearing.
    return normalize_degrees(math.degrees(az) + 180.0)


def parallactic_angle(latitude_deg: float, dec_deg: float, ha_deg: float) -> float:
    lat = math.radians(latitude_deg)
    dec = math.radians(dec_deg)
    ha = math.radians(ha_deg)
    q = math.atan2(
        math.sin(ha),
        math.tan(lat) * math.cos(dec) - math.sin(dec) * math.cos(ha),
    )
    return math.degrees(q)


def topocentric_position(jd: float, latitude_deg: float, longitude_deg: float) -> TopocentricReading:
    lam = precise_longitude(jd)
    beta = ecliptic_latitude(jd)
    ra, dec = ecliptic_to_equatorial(lam, beta, obliquity(jd))
    ha = hour_angle(local_sidereal_time(jd, longitude_deg), ra)
    return TopocentricReading(
        right_ascension_deg=ra,
        declination_deg=dec,
        hour_angle_deg=ha,
        altitude_deg=altitude(latitude_deg, dec, ha),
        azimuth_deg=azimuth(latitude_deg, dec, ha),
        parallactic_angle_deg=parallactic_angle(latitude_deg, dec, ha),
        ecliptic_longitude_deg=lam,
        ecliptic_latitude_deg=beta,
    )


def compute_topocentric(instant: datetime.datetime, coordinate: GeoCoordinate) -> TopocentricReading:
    return topocentric_position(
        to_julian_date(instant),
        coordinate.latitude_deg,
        coordinate.longitude_deg,
    )
