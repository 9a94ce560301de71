from .lunar import (
    declination,
    ecliptic_latitude,
    precise_longitude,
    precise_moon_phase,
    right_ascension,
    simple_phase,
)
from .phase import compute_moon_phase, illumination_percent, lunar_day_index, phase_label
from .time import iter_instants, to_julian_date
from .topocentric import compute_topocentric, local_sidereal_time, topocentric_position

__all__ = [
    "compute_moon_phase",
    "compute_topocentric",
    "declination",
    "ecliptic_latitude",
    "illumination_percent",
    "iter_instants",
    "local_sidereal_time",
    "lunar_day_index",
    "phase_label",
    "precise_longitude",
    "precise_moon_phase",
    "right_ascension",
    "simple_phase",
    "to_julian_date",
    "topocentric_position",
]
